#!/usr/bin/env python3
"""
Tests for the type model: aliases, method shapes, signature tables.
"""

import pytest

from ruby_analyzer.shared.types import (
    AliasType, MethodType, SignatureType, TypeKind,
    INTEGER, STRING, NIL, SYMBOL, UNKNOWN,
)
from ruby_analyzer.shared.builtins import default_classes, default_objects


class TestAliasType:

    def test_alias_equality_by_name(self):
        assert AliasType("Integer") == INTEGER
        assert AliasType("Integer") != STRING
        assert hash(AliasType("String")) == hash(STRING)

    def test_alias_kind_and_str(self):
        assert INTEGER.kind == TypeKind.ALIAS
        assert str(UNKNOWN) == "Unknown"
        assert str(NIL) == "NilClass"
        assert str(SYMBOL) == "Symbol"


class TestMethodType:

    def test_arity_and_str(self):
        method = MethodType((INTEGER, STRING), STRING)
        assert method.arity == 2
        assert method.kind == TypeKind.METHOD
        assert str(method) == "(Integer, String) -> String"

    def test_empty_argument_list(self):
        method = MethodType((), INTEGER)
        assert method.arity == 0
        assert str(method) == "() -> Integer"

    def test_equality(self):
        assert MethodType((), INTEGER) == MethodType([], AliasType("Integer"))
        assert MethodType((), INTEGER) != MethodType((), STRING)


class TestSignatureType:

    def test_define_inserts_and_replaces(self):
        table = SignatureType()
        assert len(table) == 0
        table.define("foo", MethodType((), INTEGER))
        table.define("foo", MethodType((), STRING))
        assert len(table) == 1
        assert table.get("foo") == MethodType((), STRING)
        assert "foo" in table
        assert "bar" not in table
        assert table.get("bar") is None

    def test_signature_is_unhashable(self):
        with pytest.raises(TypeError):
            hash(SignatureType())

    def test_signature_kind(self):
        assert SignatureType().kind == TypeKind.SIGNATURE


class TestBuiltins:

    def test_default_classes(self):
        classes = default_classes()
        assert classes["Integer"].get("to_s") == MethodType((), STRING)
        assert classes["String"].get("to_s") == MethodType((), STRING)

    def test_default_objects_has_empty_root(self):
        objects = default_objects()
        assert list(objects) == ["main"]
        assert len(objects["main"]) == 0

    def test_tables_are_fresh_per_call(self):
        first = default_objects()
        first["main"].define("foo", MethodType((), INTEGER))
        assert "foo" not in default_objects()["main"]
        assert default_classes()["Integer"] is not default_classes()["Integer"]
