"""Extract operations and request-body properties from a resolved description.

:func:`extract_spec` walks the ``paths`` object of a ``$ref``-resolved
OpenAPI document and builds a :class:`~specform.models.ParsedSpec` with one
:class:`~specform.models.APIOperation` per path + method pair, in document
order. Each operation's request body records every offered content type
and the JSON schema, if there is one.

:func:`schema_properties` turns such a schema into the ordered
:class:`~specform.models.PropertySchema` list the form is built from.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from specform.exceptions import LoadError
from specform.models import (
    APIOperation,
    HTTPMethod,
    ParsedSpec,
    PropertySchema,
    RequestBodyInfo,
    SchemaType,
    ServerInfo,
)
from specform.parser.resolver import resolve_refs

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)

JSON_MEDIA_TYPE = "application/json"


def extract_spec(raw_spec: dict[str, Any], openapi_version: str) -> ParsedSpec:
    """Build a :class:`~specform.models.ParsedSpec` from a raw description.

    Args:
        raw_spec: The description as returned by
            :func:`~specform.parser.loader.load_spec`.
        openapi_version: The version string returned by
            :func:`~specform.parser.loader.validate_openapi_version`.

    Raises:
        LoadError: If a ``$ref`` cannot be resolved or the document does
            not have the shape of an OpenAPI description.

    Example::

        raw = load_spec("users.yaml")
        parsed = extract_spec(raw, validate_openapi_version(raw))
        for op in parsed.operations:
            print(op.label)
    """
    spec = resolve_refs(raw_spec)
    info = spec.get("info")
    if not isinstance(info, dict):
        info = {}
    servers = spec.get("servers")
    try:
        return ParsedSpec(
            title=str(info.get("title") or "Untitled API"),
            version=str(info.get("version") or "0.0.0"),
            openapi_version=openapi_version,
            servers=[
                ServerInfo(
                    url=_text(server.get("url")) or "/",
                    description=_text(server.get("description")),
                )
                for server in (servers if isinstance(servers, list) else [])
                if isinstance(server, dict)
            ],
            operations=_extract_operations(spec),
        )
    except ValidationError as exc:
        raise LoadError(f"Malformed API description: {exc}") from exc


def _text(value: Any) -> Optional[str]:
    """Return *value* if it is a string; descriptive fields of another type are dropped."""
    return value if isinstance(value, str) else None


def _extract_operations(spec: dict[str, Any]) -> list[APIOperation]:
    operations: list[APIOperation] = []

    paths = spec.get("paths")
    if not isinstance(paths, dict):
        return operations

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for key, operation in path_item.items():
            if key not in _HTTP_METHODS or not isinstance(operation, dict):
                continue
            operations.append(
                APIOperation(
                    path=str(path),
                    method=HTTPMethod(key),
                    operation_id=_text(operation.get("operationId")),
                    summary=_text(operation.get("summary")),
                    request_body=_extract_request_body(operation.get("requestBody")),
                )
            )

    return operations


def _media_base(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def _extract_request_body(body: Any) -> Optional[RequestBodyInfo]:
    """Extract the request body, picking the JSON media type's schema.

    ``application/json`` (with or without parameters) wins; otherwise the
    first ``+json`` type that declares a schema is used.
    """
    if not isinstance(body, dict):
        return None

    content = body.get("content")
    if not isinstance(content, dict):
        content = {}
    content = {str(ct): media for ct, media in content.items()}
    json_schema: Optional[dict[str, Any]] = None
    candidates = [
        media for ct, media in content.items() if _media_base(ct) == JSON_MEDIA_TYPE
    ] + [
        media for ct, media in content.items() if _media_base(ct).endswith("+json")
    ]
    for media in candidates:
        if isinstance(media, dict) and isinstance(media.get("schema"), dict):
            json_schema = media["schema"]
            break

    return RequestBodyInfo(
        required=bool(body.get("required", False)),
        description=_text(body.get("description")),
        content_types=list(content.keys()),
        json_schema=json_schema,
    )


def schema_properties(schema: dict[str, Any]) -> list[PropertySchema]:
    """Return the properties of an object schema in declaration order.

    Members of ``allOf`` contribute their properties (and ``required``
    names) before the schema's own ``properties``; a later declaration of
    the same name replaces an earlier one in place.

    Args:
        schema: A resolved JSON Schema dict.

    Returns:
        One :class:`~specform.models.PropertySchema` per property name.
    """
    merged: dict[str, dict[str, Any]] = {}
    required: set[str] = set()
    _collect_properties(schema, merged, required)

    return [
        PropertySchema(
            name=str(name),
            declared_type=SchemaType.from_schema(prop),
            schema=prop,
            description=_text(prop.get("description")),
            required=name in required,
        )
        for name, prop in merged.items()
    ]


def _collect_properties(
    schema: Any,
    merged: dict[str, dict[str, Any]],
    required: set[str],
) -> None:
    if not isinstance(schema, dict):
        return
    members = schema.get("allOf")
    for member in members if isinstance(members, list) else []:
        _collect_properties(member, merged, required)
    properties = schema.get("properties")
    if isinstance(properties, dict):
        for name, prop in properties.items():
            merged[name] = prop if isinstance(prop, dict) else {}
    names = schema.get("required")
    if isinstance(names, list):
        required.update(r for r in names if isinstance(r, str))
