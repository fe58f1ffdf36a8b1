"""Canonical Pydantic models shared across all specform modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Parser output models** -- produced from the API description and immutable
once loaded:
    :class:`HTTPMethod`, :class:`SchemaType`, :class:`PropertySchema`,
    :class:`RequestBodyInfo`, :class:`APIOperation`, :class:`ServerInfo`,
    and :class:`ParsedSpec`.

**Form models** -- the editable runtime state of one session:
    :class:`FieldKind`, :class:`PrimitiveField`, :class:`CompoundField`
    (joined in the tagged union :data:`FormField`), the
    :data:`RequestBodyDraft` alias, and the :class:`RenderedCommand`
    output artifact.

**Configuration models** -- :class:`SessionConfig`, resolved from flags and
environment variables by :func:`~specform.config.resolve_config`.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Parser Output Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"


class SchemaType(str, enum.Enum):
    """Declared JSON Schema type of a request-body property.

    ``OTHER`` stands for any type string the form does not model
    (including a missing ``type`` on a schema that is neither object- nor
    array-shaped). Use :meth:`from_schema` to normalise a raw schema dict.
    """

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    OTHER = "other"

    @classmethod
    def from_schema(cls, schema: Any) -> "SchemaType":
        """Return the declared type of a raw JSON Schema dict.

        OpenAPI 3.1 type arrays (``["string", "null"]``) resolve to their
        first non-null entry. A schema without ``type`` is treated as an
        object when it declares ``properties`` and as an array when it
        declares ``items``.
        """
        if not isinstance(schema, dict):
            return cls.OTHER

        type_value = schema.get("type")
        if isinstance(type_value, list):
            non_null = [t for t in type_value if t != "null"]
            type_value = non_null[0] if non_null else None

        if type_value is None:
            if "properties" in schema:
                return cls.OBJECT
            if "items" in schema:
                return cls.ARRAY
            return cls.OTHER

        try:
            return cls(str(type_value))
        except ValueError:
            return cls.OTHER


class PropertySchema(BaseModel):
    """One named property of a request-body schema.

    ``schema_`` keeps the full (``$ref``-resolved) schema dict so that
    compound fields can show it as read-only context.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    declared_type: SchemaType
    schema_: dict[str, Any] = Field(default_factory=dict, alias="schema")
    description: Optional[str] = None
    required: bool = False


class RequestBodyInfo(BaseModel):
    """Parsed ``requestBody`` metadata for an :class:`APIOperation`.

    ``json_schema`` is taken from the ``application/json`` media type, or
    from the first ``+json`` structured-syntax type when plain JSON is not
    offered. It stays ``None`` when the body has no JSON representation.
    """

    model_config = ConfigDict(frozen=True)

    required: bool = False
    description: Optional[str] = None
    content_types: list[str] = Field(default_factory=list)
    json_schema: Optional[dict[str, Any]] = None

    @property
    def supports_json(self) -> bool:
        """Whether any declared content type is JSON."""
        return any(_is_json_media_type(ct) for ct in self.content_types)


class APIOperation(BaseModel):
    """A single operation (one URL path + HTTP method pair)."""

    model_config = ConfigDict(frozen=True)

    path: str
    method: HTTPMethod
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    request_body: Optional[RequestBodyInfo] = None

    @property
    def label(self) -> str:
        """Display label, e.g. ``"POST    /users"``."""
        return f"{self.method.value.upper():<8}{self.path}"

    @property
    def has_json_body(self) -> bool:
        """Whether the operation defines a request body with a JSON representation."""
        return self.request_body is not None and self.request_body.supports_json


class ServerInfo(BaseModel):
    """A server entry from the description's ``servers`` array."""

    url: str
    description: Optional[str] = None


class ParsedSpec(BaseModel):
    """The parts of an OpenAPI description a form session needs."""

    title: str
    version: str
    openapi_version: str
    servers: list[ServerInfo] = Field(default_factory=list)
    operations: list[APIOperation] = Field(default_factory=list)


# --- Form Models ---


class FieldKind(str, enum.Enum):
    """Discriminator for the two field variants."""

    PRIMITIVE = "primitive"
    COMPOUND = "compound"


class PrimitiveField(BaseModel):
    """An editable scalar value (string, integer, number or boolean).

    ``current_text`` is the free text the user typed; it is coerced to the
    declared type only when the form is committed.
    """

    kind: Literal[FieldKind.PRIMITIVE] = FieldKind.PRIMITIVE
    name: str
    declared_type: SchemaType
    current_text: str = ""
    description: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.name} ({self.declared_type.value})"


class CompoundField(BaseModel):
    """An editable JSON value (object, array, or an unmodelled type).

    ``preview`` holds the reflowed property schema and is shown as
    read-only context; editing always starts from an empty
    ``current_text``.
    """

    kind: Literal[FieldKind.COMPOUND] = FieldKind.COMPOUND
    name: str
    declared_type: SchemaType
    current_text: str = ""
    preview: str = ""
    description: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.name} ({self.declared_type.value})"


FormField = Annotated[Union[PrimitiveField, CompoundField], Field(discriminator="kind")]
"""Tagged union of the two field variants."""

RequestBodyDraft = dict[str, Any]
"""Ordered property name -> value mapping assembled at commit time."""


class RenderedCommand(BaseModel):
    """The final shell command line plus the host it targets."""

    model_config = ConfigDict(frozen=True)

    command: str
    host: str
    is_placeholder: bool
    body: str


# --- Configuration Models ---


class SessionConfig(BaseModel):
    """Settings for one form session, resolved from flags and environment.

    Nothing here is persisted; see :func:`~specform.config.resolve_config`
    for the precedence chain.
    """

    placeholder_host: str = Field(
        default="$TARGET",
        min_length=1,
        description="Host token used in the command when no live target is known",
    )
    probe_timeout: float = Field(
        default=5.0, gt=0, description="Connect/handshake timeout for host discovery"
    )
    execute: bool = Field(
        default=True, description="Run the rendered command when a live host is known"
    )
    sort_fields: bool = Field(
        default=False,
        description="Order fields by name instead of schema declaration order",
    )


def _is_json_media_type(content_type: str) -> bool:
    """Return True for ``application/json`` and ``+json`` media types."""
    media = content_type.split(";", 1)[0].strip().lower()
    return media == "application/json" or media.endswith("+json")
