"""Tests for specform.parser.resolver."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from specform.exceptions import LoadError
from specform.parser.resolver import lookup_pointer, resolve_refs


def _doc(schemas: dict[str, Any], body_schema: dict[str, Any]) -> dict[str, Any]:
    return {
        "openapi": "3.0.3",
        "paths": {
            "/things": {
                "post": {
                    "requestBody": {
                        "content": {"application/json": {"schema": body_schema}}
                    }
                }
            }
        },
        "components": {"schemas": schemas},
    }


def _body_schema(doc: dict[str, Any]) -> dict[str, Any]:
    return doc["paths"]["/things"]["post"]["requestBody"]["content"]["application/json"]["schema"]


class TestResolveRefs:
    def test_request_body_ref_inlined(self) -> None:
        thing = {"type": "object", "properties": {"name": {"type": "string"}}}
        doc = _doc({"Thing": thing}, {"$ref": "#/components/schemas/Thing"})
        assert _body_schema(resolve_refs(doc)) == thing

    def test_nested_refs(self) -> None:
        doc = _doc(
            {
                "Outer": {
                    "type": "object",
                    "properties": {"inner": {"$ref": "#/components/schemas/Inner"}},
                },
                "Inner": {"type": "array", "items": {"type": "integer"}},
            },
            {"$ref": "#/components/schemas/Outer"},
        )
        resolved = _body_schema(resolve_refs(doc))
        assert resolved["properties"]["inner"] == {"type": "array", "items": {"type": "integer"}}

    def test_original_untouched(self) -> None:
        doc = _doc({"T": {"type": "string"}}, {"$ref": "#/components/schemas/T"})
        before = copy.deepcopy(doc)
        resolve_refs(doc)
        assert doc == before

    def test_key_order_kept(self) -> None:
        doc = _doc(
            {"T": {"type": "object", "properties": {"z": {}, "a": {}, "m": {}}}},
            {"$ref": "#/components/schemas/T"},
        )
        assert list(_body_schema(resolve_refs(doc))["properties"]) == ["z", "a", "m"]

    def test_recursive_schema_terminates(self) -> None:
        node = {
            "type": "object",
            "properties": {"child": {"$ref": "#/components/schemas/Node"}},
        }
        doc = _doc({"Node": node}, {"$ref": "#/components/schemas/Node"})
        resolved = _body_schema(resolve_refs(doc))
        assert resolved["properties"]["child"] == {"$ref": "#/components/schemas/Node"}

    def test_sibling_refs_both_inlined(self) -> None:
        doc = _doc(
            {
                "Pair": {
                    "type": "object",
                    "properties": {
                        "left": {"$ref": "#/components/schemas/Leaf"},
                        "right": {"$ref": "#/components/schemas/Leaf"},
                    },
                },
                "Leaf": {"type": "boolean"},
            },
            {"$ref": "#/components/schemas/Pair"},
        )
        props = _body_schema(resolve_refs(doc))["properties"]
        assert props["left"] == props["right"] == {"type": "boolean"}

    def test_missing_target(self) -> None:
        doc = _doc({}, {"$ref": "#/components/schemas/Missing"})
        with pytest.raises(LoadError, match="Cannot resolve"):
            resolve_refs(doc)


class TestLookupPointer:
    def test_schema(self) -> None:
        root = {"components": {"schemas": {"A": {"type": "string"}}}}
        assert lookup_pointer("#/components/schemas/A", root) == {"type": "string"}

    def test_list_index(self) -> None:
        root = {"a": [{"x": 1}, {"x": 2}]}
        assert lookup_pointer("#/a/1/x", root) == 2

    def test_escaped_segments(self) -> None:
        root = {"paths": {"/users/{id}": {"a~b": 1}}}
        assert lookup_pointer("#/paths/~1users~1{id}/a~0b", root) == 1

    def test_external_ref(self) -> None:
        with pytest.raises(LoadError, match="External \\$ref not supported"):
            lookup_pointer("other.yaml#/components/schemas/A", {})

    def test_bad_index(self) -> None:
        with pytest.raises(LoadError):
            lookup_pointer("#/a/5", {"a": [1]})
