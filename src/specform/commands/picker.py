"""Choose which operation to build a request for.

Only operations that define a request body with a JSON representation are
offered, whatever their HTTP method, so GET, PUT and DELETE bodies are
handled the same way as POST. A POST without any request body is offered
too and renders with an empty ``{}`` body; other methods without a body
are not.

Three ways to pick:

* :func:`find_operation` -- an explicit ``"POST /users"`` selector;
* :func:`filter_operations` -- fuzzy subsequence filter over the labels;
* :func:`pick_operation` -- a numbered list and a prompt.
"""

from __future__ import annotations

from typing import Iterable, Optional

import typer

from specform.exceptions import InvalidUsageError
from specform.models import APIOperation, HTTPMethod
from specform.output import get_output


def is_selectable(operation: APIOperation) -> bool:
    """Whether the form can build a body for *operation*."""
    if operation.request_body is None:
        return operation.method == HTTPMethod.POST
    return operation.has_json_body


def selectable_operations(operations: Iterable[APIOperation]) -> list[APIOperation]:
    return [op for op in operations if is_selectable(op)]


def find_operation(operations: list[APIOperation], selector: str) -> APIOperation:
    """Return the operation named by *selector*.

    *selector* is ``"METHOD PATH"`` (method case-insensitive) or a bare
    path that only one operation uses.

    Raises:
        InvalidUsageError: If nothing matches, the method is unknown, or a
            bare path is ambiguous.
    """
    parts = selector.split(None, 1)
    if len(parts) == 2:
        method_str, path = parts[0].lower(), parts[1].strip()
        try:
            method: Optional[HTTPMethod] = HTTPMethod(method_str)
        except ValueError:
            raise InvalidUsageError(f"Unknown HTTP method '{parts[0]}'") from None
    else:
        method, path = None, selector.strip()

    matches = [
        op for op in operations
        if op.path == path and (method is None or op.method == method)
    ]
    if not matches:
        raise InvalidUsageError(f"No operation matches '{selector}'")
    if len(matches) > 1:
        methods = ", ".join(op.method.value.upper() for op in matches)
        raise InvalidUsageError(
            f"'{selector}' is ambiguous ({methods}); prefix it with the method"
        )
    return matches[0]


def _match_span(label: str, query: str) -> Optional[int]:
    """Return the span of the leftmost subsequence match of *query* in *label*."""
    start = -1
    pos = 0
    for ch in query:
        pos = label.find(ch, pos)
        if pos < 0:
            return None
        if start < 0:
            start = pos
        pos += 1
    return pos - max(start, 0)


def filter_operations(operations: Iterable[APIOperation], query: str) -> list[APIOperation]:
    """Return operations whose label contains *query* as a subsequence.

    Matching ignores case and whitespace in the query. Tighter matches come
    first, then shorter labels; an empty query returns everything in
    original order.
    """
    needle = "".join(query.lower().split())
    ops = list(operations)
    if not needle:
        return ops

    scored: list[tuple[int, int, int, APIOperation]] = []
    for index, op in enumerate(ops):
        span = _match_span(op.label.lower(), needle)
        if span is not None:
            scored.append((span, len(op.label), index, op))
    scored.sort(key=lambda item: item[:3])
    return [item[3] for item in scored]


def pick_operation(operations: list[APIOperation], title: str = "Operations") -> APIOperation:
    """Show a numbered list on stderr and prompt for a choice.

    Raises:
        InvalidUsageError: If *operations* is empty.
    """
    if not operations:
        raise InvalidUsageError("No operations to choose from")
    if len(operations) == 1:
        return operations[0]

    get_output().show_choices([op.label for op in operations], title=title)
    while True:
        choice = typer.prompt("Operation number", type=int, err=True)
        if 1 <= choice <= len(operations):
            return operations[choice - 1]
        get_output().warning(f"Choose a number between 1 and {len(operations)}")
