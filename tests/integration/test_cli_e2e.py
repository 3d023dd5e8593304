#!/usr/bin/env python3
"""
Command-line entry point.
"""

import sys

import pytest

from ruby_analyzer.__main__ import main


pytestmark = pytest.mark.integration


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["ruby-analyzer", *args])
    return main()


class TestCLI:

    def test_prints_bindings_and_methods(self, monkeypatch, tmp_path, capsys):
        path = tmp_path / "prog.rb"
        path.write_text('a = 1\nb = "s"\ndef foo\n  1\nend\n')
        assert run_cli(monkeypatch, str(path)) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["a : Integer", "b : String", "main#foo: () -> Integer"]

    def test_type_errors_exit_nonzero(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setenv("NO_COLOR", "1")
        path = tmp_path / "bad.rb"
        path.write_text("x = y\n")
        assert run_cli(monkeypatch, str(path)) == 1
        captured = capsys.readouterr()
        assert "x : Unknown" in captured.out
        assert "error[E0425]: undefined local variable `y`" in captured.err

    def test_syntax_error(self, monkeypatch, tmp_path, capsys):
        path = tmp_path / "broken.rb"
        path.write_text("x = = 1\n")
        assert run_cli(monkeypatch, str(path)) == 1
        assert "error[E0001]" in capsys.readouterr().err

    def test_missing_file(self, monkeypatch, tmp_path, capsys):
        assert run_cli(monkeypatch, str(tmp_path / "nope.rb")) == 1
        assert "file not found" in capsys.readouterr().err
