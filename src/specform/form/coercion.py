"""Coerce a field's raw text into a typed JSON value at commit time.

Coercion is generic over the field variant:

* ``string`` -- the text verbatim;
* ``boolean`` -- ``True`` only for the exact text ``"true"``; anything
  else, including empty text, is ``False``;
* ``integer`` -- strict base-10 parse into the signed 64-bit range;
* ``number`` -- strict decimal/exponential parse into a finite float;
* compound fields -- the raw text, unchanged; parsing happens in
  :mod:`specform.form.assembler`.

Integer and number failures raise :class:`~specform.exceptions.CoercionError`
so the form can report the field and ask again.
"""

from __future__ import annotations

import math
from typing import Any, Callable

from specform.exceptions import CoercionError
from specform.form.classifier import (
    INT64_MAX,
    INT64_MIN,
    INTEGER_RE,
    NUMBER_RE,
)
from specform.models import FieldKind, FormField, SchemaType


def coerce_string(name: str, text: str) -> str:
    return text


def coerce_boolean(name: str, text: str) -> bool:
    return text == "true"


def coerce_integer(name: str, text: str) -> int:
    """Parse *text* as a base-10 signed 64-bit integer.

    Raises:
        CoercionError: On empty, malformed, or out-of-range text.
    """
    if not text:
        raise CoercionError(name, "an integer is required")
    if INTEGER_RE.fullmatch(text) is None:
        raise CoercionError(name, f"{text!r} is not a base-10 integer")
    value = int(text, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        raise CoercionError(name, f"{text!r} is out of the 64-bit integer range")
    return value


def coerce_number(name: str, text: str) -> float:
    """Parse *text* as a finite 64-bit float.

    Raises:
        CoercionError: On empty, malformed, or out-of-range text.
    """
    if not text:
        raise CoercionError(name, "a number is required")
    if NUMBER_RE.fullmatch(text) is None:
        raise CoercionError(name, f"{text!r} is not a number")
    value = float(text)
    if math.isinf(value):
        raise CoercionError(name, f"{text!r} is out of the 64-bit float range")
    return value


_COERCERS: dict[SchemaType, Callable[[str, str], Any]] = {
    SchemaType.STRING: coerce_string,
    SchemaType.BOOLEAN: coerce_boolean,
    SchemaType.INTEGER: coerce_integer,
    SchemaType.NUMBER: coerce_number,
}


def coerce_field(field: FormField) -> Any:
    """Return the committed value of *field*.

    Compound fields return their raw text; see
    :func:`~specform.form.assembler.assemble_body` for how it is parsed.

    Raises:
        CoercionError: If a primitive field's text does not parse as its
            declared type.
    """
    if field.kind == FieldKind.COMPOUND:
        return field.current_text
    return _COERCERS[field.declared_type](field.name, field.current_text)
