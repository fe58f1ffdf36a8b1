"""Inline internal ``$ref`` pointers in an OpenAPI description.

Request-body schemas are usually declared once under
``components/schemas`` and referenced from each operation. Before the
form can classify a property it needs the referenced schema itself, so
:func:`resolve_refs` returns a copy of the description with every
``{"$ref": "#/..."}`` replaced by its target.

Only internal pointers are supported; anything else raises
:class:`~specform.exceptions.LoadError`. A reference that leads back to
itself (a recursive schema such as a tree node) is left in place at the
point where the cycle closes.
"""

from __future__ import annotations

from typing import Any, FrozenSet

from specform.exceptions import LoadError


def resolve_refs(spec: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *spec* with all internal ``$ref`` pointers inlined.

    Raises:
        LoadError: If a pointer is external or names a missing location.
    """
    return _resolve(spec, spec, frozenset())


def lookup_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Return the value *ref* (``"#/components/schemas/Pet"``) points to in *root*.

    Segments are unescaped per RFC 6901 (``~1`` is ``/``, ``~0`` is ``~``).

    Raises:
        LoadError: If *ref* is not an internal pointer or cannot be followed.
    """
    if not ref.startswith("#/"):
        raise LoadError(f"External $ref not supported: {ref}")

    current: Any = root
    for raw in ref[2:].split("/"):
        segment = raw.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            raise LoadError(f"Cannot resolve $ref '{ref}': no '{segment}' at that location")
    return current


def _resolve(node: Any, root: dict[str, Any], active: FrozenSet[str]) -> Any:
    # ``active`` holds the refs being expanded on the current branch only,
    # so sibling references to the same schema both get inlined.
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            if ref in active:
                return dict(node)
            return _resolve(lookup_pointer(ref, root), root, active | {ref})
        return {key: _resolve(value, root, active) for key, value in node.items()}
    if isinstance(node, list):
        return [_resolve(item, root, active) for item in node]
    return node
