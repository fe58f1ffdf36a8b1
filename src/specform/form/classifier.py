"""Classify request-body properties as primitive or compound.

A *primitive* property (``string``, ``integer``, ``number``, ``boolean``) is
edited as free text and coerced to its type on commit. Everything else --
``object``, ``array``, or a type the form does not model -- is *compound*
and edited as raw JSON.

Primitive classifications carry an input-acceptance predicate that the form
applies to every edit; an edit whose resulting text the predicate rejects
is discarded and the previous text kept.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from specform.models import FieldKind, PropertySchema, SchemaType

AcceptFn = Callable[[str], bool]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Base-10 signed integer, no whitespace or digit separators.
INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Decimal or exponential float literal: "1", "-1.5", ".5", "2.", "6e-3".
NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# Intermediate states reached while typing a value that is not yet parseable.
_INTEGER_PARTIALS = frozenset({"", "+", "-"})
_NUMBER_PARTIALS = frozenset({"", "+", "-", ".", "+.", "-."})


@dataclass(frozen=True)
class Classification:
    """Result of :func:`classify`.

    Attributes:
        kind: Whether the property is edited as a primitive or compound field.
        accept: Acceptance predicate for primitive edits, or ``None`` when any
            text is accepted.
    """

    kind: FieldKind
    accept: Optional[AcceptFn] = None

    @property
    def is_primitive(self) -> bool:
        return self.kind == FieldKind.PRIMITIVE


def accept_boolean(text: str) -> bool:
    """Accept only the literal texts ``"true"`` and ``"false"``."""
    return text in ("true", "false")


def accept_integer(text: str) -> bool:
    """Accept base-10 signed integer text, plus the cleared and lone-sign states."""
    return text in _INTEGER_PARTIALS or INTEGER_RE.fullmatch(text) is not None


def accept_number(text: str) -> bool:
    """Accept decimal/exponential float text, plus partial sign/point states."""
    return text in _NUMBER_PARTIALS or NUMBER_RE.fullmatch(text) is not None


_PRIMITIVES: dict[SchemaType, Optional[AcceptFn]] = {
    SchemaType.STRING: None,
    SchemaType.BOOLEAN: accept_boolean,
    SchemaType.INTEGER: accept_integer,
    SchemaType.NUMBER: accept_number,
}


def classify_type(declared_type: SchemaType) -> Classification:
    """Classify a bare declared type."""
    if declared_type in _PRIMITIVES:
        return Classification(FieldKind.PRIMITIVE, _PRIMITIVES[declared_type])
    return Classification(FieldKind.COMPOUND)


def classify(prop: PropertySchema) -> Classification:
    """Classify *prop* by its declared type.

    Example::

        >>> classify(PropertySchema(name="age", declared_type="integer")).kind
        <FieldKind.PRIMITIVE: 'primitive'>
        >>> classify(PropertySchema(name="tags", declared_type="array")).accept is None
        True
    """
    return classify_type(prop.declared_type)
