"""Assemble the request body from a committed field list.

Every field contributes exactly one key, in field order. Primitive values
come from :func:`~specform.form.coercion.coerce_field`; compound fields'
JSON text is parsed here with :func:`~specform.form.reflow.parse_json`, so
the body holds nested structures rather than strings.
"""

from __future__ import annotations

from typing import Any, Iterable

from specform.exceptions import CompoundParseError, FieldError, JSONReflowError
from specform.form.coercion import coerce_field
from specform.form.reflow import parse_json
from specform.models import FieldKind, FormField, RequestBodyDraft


def field_value(field: FormField) -> Any:
    """Return the body value for a single field.

    Raises:
        CoercionError: If a primitive field cannot be coerced.
        CompoundParseError: If a compound field's text is not valid JSON.
    """
    value = coerce_field(field)
    if field.kind == FieldKind.PRIMITIVE:
        return value
    if not value.strip():
        raise CompoundParseError(field.name, "a JSON value is required")
    try:
        return parse_json(value)
    except JSONReflowError as exc:
        raise CompoundParseError(field.name, f"invalid JSON: {exc}") from exc


def assemble_body(fields: Iterable[FormField]) -> RequestBodyDraft:
    """Build the request body, stopping at the first bad field.

    Raises:
        CoercionError: If a primitive field cannot be coerced.
        CompoundParseError: If a compound field's text is not valid JSON.
    """
    return {field.name: field_value(field) for field in fields}


def collect_errors(fields: Iterable[FormField]) -> dict[str, str]:
    """Return every field that would fail to assemble, mapped to its reason.

    An empty mapping means :func:`assemble_body` will succeed.
    """
    errors: dict[str, str] = {}
    for field in fields:
        try:
            field_value(field)
        except FieldError as exc:
            errors[field.name] = exc.reason
    return errors
