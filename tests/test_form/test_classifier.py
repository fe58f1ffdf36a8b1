"""Tests for specform.form.classifier.

Covers:
- primitive/compound split for every declared type
- acceptance predicates for boolean, integer and number text
- SchemaType normalisation of raw schemas
"""

from __future__ import annotations

import pytest

from specform.form.classifier import (
    accept_boolean,
    accept_integer,
    accept_number,
    classify,
    classify_type,
)
from specform.models import FieldKind, PropertySchema, SchemaType


# ------------------------------------------------------------------ #
# classify
# ------------------------------------------------------------------ #


class TestClassify:
    """Test the primitive/compound decision."""

    @pytest.mark.parametrize(
        "declared",
        [SchemaType.STRING, SchemaType.INTEGER, SchemaType.NUMBER, SchemaType.BOOLEAN],
    )
    def test_scalars_are_primitive(self, declared: SchemaType) -> None:
        prop = PropertySchema(name="p", declared_type=declared)
        assert classify(prop).kind == FieldKind.PRIMITIVE

    @pytest.mark.parametrize(
        "declared", [SchemaType.OBJECT, SchemaType.ARRAY, SchemaType.OTHER]
    )
    def test_everything_else_is_compound(self, declared: SchemaType) -> None:
        prop = PropertySchema(name="p", declared_type=declared)
        result = classify(prop)
        assert result.kind == FieldKind.COMPOUND
        assert result.accept is None

    def test_string_accepts_anything(self) -> None:
        assert classify_type(SchemaType.STRING).accept is None

    def test_boolean_predicate(self) -> None:
        assert classify_type(SchemaType.BOOLEAN).accept is accept_boolean

    def test_integer_predicate(self) -> None:
        assert classify_type(SchemaType.INTEGER).accept is accept_integer

    def test_number_predicate(self) -> None:
        assert classify_type(SchemaType.NUMBER).accept is accept_number


# ------------------------------------------------------------------ #
# Acceptance predicates
# ------------------------------------------------------------------ #


class TestAcceptBoolean:
    def test_literals(self) -> None:
        assert accept_boolean("true")
        assert accept_boolean("false")

    @pytest.mark.parametrize("text", ["", "t", "tru", "True", "yes", "1", "false "])
    def test_rejects_everything_else(self, text: str) -> None:
        assert not accept_boolean(text)


class TestAcceptInteger:
    @pytest.mark.parametrize("text", ["0", "42", "-7", "+13", "007"])
    def test_integers(self, text: str) -> None:
        assert accept_integer(text)

    @pytest.mark.parametrize("text", ["", "-", "+"])
    def test_partial_states(self, text: str) -> None:
        assert accept_integer(text)

    @pytest.mark.parametrize("text", ["4.2", "1e3", "abc", " 1", "1_000", "0x10", "--1"])
    def test_rejects_non_integers(self, text: str) -> None:
        assert not accept_integer(text)


class TestAcceptNumber:
    @pytest.mark.parametrize("text", ["0", "4.2", "-1.5", ".5", "2.", "6e-3", "+1E10"])
    def test_numbers(self, text: str) -> None:
        assert accept_number(text)

    @pytest.mark.parametrize("text", ["", "-", ".", "-."])
    def test_partial_states(self, text: str) -> None:
        assert accept_number(text)

    @pytest.mark.parametrize("text", ["abc", "1.2.3", "nan", "inf", "1e", "1,5"])
    def test_rejects_non_numbers(self, text: str) -> None:
        assert not accept_number(text)


# ------------------------------------------------------------------ #
# SchemaType.from_schema
# ------------------------------------------------------------------ #


class TestSchemaTypeFromSchema:
    def test_plain_type(self) -> None:
        assert SchemaType.from_schema({"type": "integer"}) == SchemaType.INTEGER

    def test_type_array_uses_first_non_null(self) -> None:
        assert SchemaType.from_schema({"type": ["null", "number"]}) == SchemaType.NUMBER

    def test_null_only_type_array(self) -> None:
        assert SchemaType.from_schema({"type": ["null"]}) == SchemaType.OTHER

    def test_missing_type_with_properties(self) -> None:
        assert SchemaType.from_schema({"properties": {}}) == SchemaType.OBJECT

    def test_missing_type_with_items(self) -> None:
        assert SchemaType.from_schema({"items": {}}) == SchemaType.ARRAY

    def test_empty_schema(self) -> None:
        assert SchemaType.from_schema({}) == SchemaType.OTHER

    def test_unknown_type(self) -> None:
        assert SchemaType.from_schema({"type": "file"}) == SchemaType.OTHER

    def test_non_dict(self) -> None:
        assert SchemaType.from_schema(True) == SchemaType.OTHER
