"""Build the editable field list for an operation's request body.

Each property of the JSON request-body schema becomes exactly one field:

* primitive properties become a :class:`~specform.models.PrimitiveField`
  with empty text; its acceptance predicate is looked up from the
  classifier whenever the field is edited;
* compound properties become a :class:`~specform.models.CompoundField`
  with empty text and a read-only ``preview`` of the property's schema.

Fields follow the schema's declared property order unless sorting is
requested, which keeps the request-body key order (and therefore the
rendered command) deterministic.
"""

from __future__ import annotations

from typing import Iterable

from specform.exceptions import UnsupportedContentTypeError
from specform.form.classifier import classify
from specform.form.reflow import render_json
from specform.models import (
    APIOperation,
    CompoundField,
    FormField,
    PrimitiveField,
    PropertySchema,
)
from specform.parser.extractor import schema_properties


def build_field(prop: PropertySchema) -> FormField:
    """Create the field for a single property."""
    if classify(prop).is_primitive:
        return PrimitiveField(
            name=prop.name,
            declared_type=prop.declared_type,
            description=prop.description,
        )
    return CompoundField(
        name=prop.name,
        declared_type=prop.declared_type,
        preview=render_json(prop.schema_),
        description=prop.description,
    )


def build_fields(properties: Iterable[PropertySchema], *, sort: bool = False) -> list[FormField]:
    """Create one field per property.

    Args:
        properties: Property schemas in declaration order.
        sort: Order the fields lexicographically by name instead.

    Returns:
        The ordered field list.
    """
    props = list(properties)
    if sort:
        props.sort(key=lambda p: p.name)
    return [build_field(p) for p in props]


def build_form(operation: APIOperation, *, sort: bool = False) -> list[FormField]:
    """Create the field list for *operation*'s request body.

    An operation without a request body yields an empty form.

    Raises:
        UnsupportedContentTypeError: If the operation has a request body
            but none of its content types is JSON.
    """
    body = operation.request_body
    if body is None:
        return []
    if not body.supports_json:
        offered = ", ".join(body.content_types) or "none"
        raise UnsupportedContentTypeError(
            f"{operation.label.strip()} does not accept 'application/json' "
            f"(offers: {offered})"
        )
    return build_fields(schema_properties(body.json_schema or {}), sort=sort)
