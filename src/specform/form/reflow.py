"""Parse and re-serialise JSON fragments for display and editing.

*Reflow* is parse-then-render: it normalises whitespace and indentation of
a JSON fragment while keeping its structure, values, and object key order.
Compound fields use it to show their property schema as a readable preview,
and the request assembler uses :func:`parse_json` to turn a compound
field's text into a value.
"""

from __future__ import annotations

import json
from typing import Any

from specform.exceptions import JSONReflowError

INDENT = 2


def parse_json(text: str) -> Any:
    """Parse *text* into a generic value tree.

    Objects become dicts in document key order; arrays become lists.

    Raises:
        JSONReflowError: If *text* is not well-formed JSON. The error
            carries the 1-based line and column of the failure.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise JSONReflowError(
            f"{exc.msg} (line {exc.lineno}, column {exc.colno})",
            line=exc.lineno,
            column=exc.colno,
        ) from exc


def _reject_constant(name: str) -> Any:
    # json accepts NaN and Infinity by default; they are not valid JSON.
    raise JSONReflowError(f"Invalid JSON constant {name}")


def render_json(value: Any) -> str:
    """Serialise *value* as JSON indented by two spaces.

    Key order is preserved and non-ASCII characters are written as-is.
    """
    return json.dumps(value, indent=INDENT, ensure_ascii=False)


def reflow(text: str) -> str:
    """Return *text* re-rendered with stable indentation.

    Raises:
        JSONReflowError: If *text* is not well-formed JSON.
    """
    return render_json(parse_json(text))
