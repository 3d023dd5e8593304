#!/usr/bin/env python3
"""
Tests for the analysis environment: active bindings, value stack, tables.
"""

import pytest

from ruby_analyzer.analysis.environment import Environment
from ruby_analyzer.shared.errors import AnalyzerImplementationError, UndefinedVariable
from ruby_analyzer.shared.types import MethodType, SignatureType, INTEGER, STRING
from tests.test_utils import loc


class TestActiveBindings:

    def test_top_level_writes_go_to_instances(self, env):
        env.bind("x", INTEGER, loc(1, 1))
        assert env.get_instance_type("x") == INTEGER
        assert env.get_instance("x").location == loc(1, 1)
        assert env.lookup("x") == INTEGER

    def test_body_writes_stay_in_scope(self, env):
        with env.scope("foo"):
            env.bind("x", STRING)
            assert env.lookup("x") == STRING
            assert env.scope_depth == 1
        assert env.scope_depth == 0
        assert env.get_instance_type("x") is None

    def test_body_does_not_see_instances(self, env):
        env.bind("x", INTEGER)
        with env.scope("foo"):
            assert env.lookup("x") is None

    def test_nested_frames_see_only_top(self, env):
        with env.scope("outer"):
            env.bind("x", INTEGER)
            with env.scope("inner"):
                assert env.lookup("x") is None
            assert env.lookup("x") == INTEGER

    def test_scope_cleanup_on_exception(self, env):
        with pytest.raises(KeyError):
            with env.scope("foo"):
                raise KeyError("x")
        assert env.scope_depth == 0

    def test_exit_scope_underflow(self, env):
        with pytest.raises(AnalyzerImplementationError):
            env.exit_scope()


class TestValueStack:

    def test_push_pop(self, env):
        env.push_value(INTEGER)
        env.push_value(STRING)
        assert env.value_depth == 2
        assert env.pop_value() == STRING
        assert env.pop_value() == INTEGER

    def test_pop_empty_fails_fast(self, env):
        with pytest.raises(AnalyzerImplementationError):
            env.pop_value()


class TestTables:

    def test_defaults(self, env):
        assert env.get_object("main") == SignatureType()
        assert env.get_class("Integer").get("to_s") == MethodType((), STRING)
        assert env.get_method("Integer", "to_s") == MethodType((), STRING)
        assert env.get_method("Integer", "nope") is None
        assert env.get_method("Nope", "to_s") is None

    def test_define_method_on_root_object(self, env):
        env.define_method("foo", MethodType((), INTEGER))
        env.define_method("foo", MethodType((), STRING))
        assert env.get_object("main").get("foo") == MethodType((), STRING)
        assert env.get_method("main", "foo") == MethodType((), STRING)

    def test_define_method_on_new_owner(self, env):
        env.define_method("bar", MethodType((), INTEGER), owner="Widget")
        assert env.get_object("Widget").get("bar") == MethodType((), INTEGER)

    def test_environments_do_not_share_tables(self):
        first = Environment()
        first.define_method("foo", MethodType((), INTEGER))
        second = Environment()
        assert "foo" not in second.get_object("main")

    def test_from_tables(self):
        env = Environment.from_tables(
            instances={"x": "Integer"},
            classes={"Integer": {"to_s": ((), "String")}},
        )
        assert env.get_instance_type("x") == INTEGER
        assert env.classes == {"Integer": SignatureType({"to_s": MethodType((), STRING)})}
        assert env.get_object("main") == SignatureType()

    def test_from_tables_method_spec_with_arguments(self):
        env = Environment.from_tables(objects={"main": {"add": (("Integer", "String"), "Integer")}})
        assert env.get_method("main", "add") == MethodType((INTEGER, STRING), INTEGER)
        assert env.get_method("main", "add").arity == 2


class TestErrors:

    def test_errors_accumulate_in_order(self, env):
        env.reporter.report_undefined_variable("a", loc(1, 1))
        env.reporter.report_undefined_variable("b", loc(2, 1))
        assert env.has_errors()
        assert [e.kind for e in env.errors] == [UndefinedVariable("a"), UndefinedVariable("b")]
