#!/usr/bin/env python3
"""
Tests for error collection and rustc-style diagnostics.
"""

import re

import pytest

from ruby_analyzer.shared.errors import (
    AnalyzerImplementationError, AnalyzerSourceError, ErrorReporter,
    TypecheckError, UndefinedVariable,
)
from ruby_analyzer.shared.source_location import SourceLocation
from tests.test_utils import loc

ANSI = re.compile(r"\033\[[0-9;]*m")


class TestErrorKinds:

    def test_undefined_variable_message(self):
        kind = UndefinedVariable("y")
        assert kind.code == "E0425"
        assert kind.message == "undefined local variable `y`"
        assert kind.label == "not found in this scope"

    def test_typecheck_error_str(self):
        error = TypecheckError(UndefinedVariable("y"), loc(2, 7, "main.rb"))
        assert str(error) == "main.rb:2:7: error[E0425]: undefined local variable `y`"

    def test_typecheck_error_without_location(self):
        error = TypecheckError(UndefinedVariable("y"), None)
        assert str(error).startswith("<unknown location>")


class TestErrorReporter:

    def test_report_appends_in_order(self):
        reporter = ErrorReporter()
        assert not reporter.has_errors()
        first = reporter.report_undefined_variable("a", loc(1, 1))
        second = reporter.report(UndefinedVariable("b"), loc(2, 1))
        assert reporter.errors == [first, second]
        assert reporter.has_errors()

    def test_format_with_source(self):
        reporter = ErrorReporter({"main.rb": "def foo\n  x = y\nend"})
        reporter.report_undefined_variable("y", SourceLocation("main.rb", 2, 7))
        text = reporter.format_error(reporter.errors[0], color=False)
        lines = text.split("\n")
        assert lines[0] == "error[E0425]: undefined local variable `y`"
        assert lines[1] == " --> main.rb:2:7"
        assert lines[3] == "2 |   x = y"
        assert lines[4] == "  |       ^ not found in this scope"
        assert "= help: assign `y` before reading it in this method body" in text

    def test_span_from_end_column(self):
        reporter = ErrorReporter({"main.rb": "a = value"})
        location = SourceLocation("main.rb", 1, 5, end_line=1, end_column=10)
        reporter.report_undefined_variable("value", location)
        text = reporter.format_error(reporter.errors[0], color=False)
        assert "    ^^^^^ not found in this scope" in text

    def test_format_without_source(self):
        reporter = ErrorReporter()
        reporter.report_undefined_variable("y", loc(3, 4, "gone.rb"))
        text = reporter.format_error(reporter.errors[0], color=False)
        assert " --> gone.rb:3:4" in text
        assert "|   " not in text

    def test_summary_line(self):
        reporter = ErrorReporter()
        reporter.report_undefined_variable("a", loc(1, 1))
        assert reporter.format_all_errors(color=False).endswith("error: found 1 type error")
        reporter.report_undefined_variable("b", loc(1, 5))
        assert reporter.format_all_errors(color=False).endswith("error: found 2 type errors")

    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        reporter = ErrorReporter()
        reporter.report_undefined_variable("a", loc(1, 1))
        assert not ANSI.search(reporter.format_all_errors())

    def test_color_env_var(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("RUBY_ANALYZER_COLOR", "never")
        reporter = ErrorReporter()
        reporter.report_undefined_variable("a", loc(1, 1))
        assert not ANSI.search(reporter.format_all_errors())

    def test_color_when_forced(self):
        reporter = ErrorReporter()
        reporter.report_undefined_variable("a", loc(1, 1))
        assert ANSI.search(reporter.format_all_errors(color=True))

    def test_print_errors_to_stderr(self, capsys):
        reporter = ErrorReporter()
        reporter.print_errors()
        assert capsys.readouterr().err == ""
        reporter.report_undefined_variable("a", loc(1, 1))
        reporter.print_errors()
        assert "undefined local variable `a`" in capsys.readouterr().err


class TestExceptions:

    def test_source_error_str(self):
        err = AnalyzerSourceError("Parse error: bad", loc(1, 2, "x.rb"))
        assert str(err) == "error[E0001]: Parse error: bad\n --> x.rb:1:2"

    def test_implementation_error_str(self):
        err = AnalyzerImplementationError("stack underflow")
        assert str(err) == "[E9999] stack underflow"

    def test_implementation_error_is_not_source_error(self):
        with pytest.raises(AnalyzerImplementationError):
            raise AnalyzerImplementationError("boom")
        assert not issubclass(AnalyzerImplementationError, AnalyzerSourceError)
