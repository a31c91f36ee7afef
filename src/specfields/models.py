"""Canonical Pydantic models shared across all specfields modules.

This is the single source of truth for data shapes in the project.  The
models fall into three groups:

**Document vocabulary** -- enumerations over the OpenAPI object model:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`SchemaKind`.

**Compiler output** -- produced by :class:`~specfields.generator.fields.FieldCompiler`
and consumed by the host platform:
    :class:`FieldType`, :class:`FieldOption`, :class:`CollectionOption`,
    :class:`SendRule`, :class:`RequestRule`, :class:`RoutingRule`,
    :class:`FieldDescriptor`.

**Build output and configuration** -- produced by
:class:`~specfields.builder.FieldsBuilder`:
    :class:`ResourceOption`, :class:`CompiledOperation`, :class:`BuildResult`,
    :class:`Override`, :class:`BuilderConfig`.

Output models serialise with camelCase aliases (``displayName``,
``typeOptions``, ``propertyInDotNotation``) because that is the key style the
host platform reads.  Use :meth:`FieldDescriptor.to_dict` (or
:meth:`BuildResult.to_dict`) rather than ``model_dump`` directly so that
unset optional keys are dropped.
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_serializer


# --- Document vocabulary ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised as operation keys on an OpenAPI path item.

    Any other key on a path item (``parameters``, ``summary``,
    ``description``, ``servers``, extensions) is not an operation.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """Parameter locations the compiler knows how to route.

    OpenAPI also allows ``cookie``; the compiler rejects it as an unknown
    location.
    """

    QUERY = "query"
    PATH = "path"
    HEADER = "header"


class SchemaKind(str, enum.Enum):
    """Tagged-variant discriminator for a resolved schema node.

    See :func:`~specfields.generator.schema_kind.schema_kind` for the
    classification rules.
    """

    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"
    UNSPECIFIED = "unspecified"


# --- Compiler output ---


class FieldType(str, enum.Enum):
    """Presentation types a field descriptor can carry."""

    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    JSON = "json"
    OPTIONS = "options"
    FIXED_COLLECTION = "fixedCollection"


class FieldOption(BaseModel):
    """One labeled choice of an ``options`` field (an enum literal).

    ``value`` is always serialised, even when the literal is ``null``.
    """

    name: str
    value: Any = None

    @model_serializer
    def _serialize(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


class CollectionOption(BaseModel):
    """A named group of repeatable sub-fields inside a ``fixedCollection`` field."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    display_name: str = Field(alias="displayName")
    values: list[FieldDescriptor] = Field(default_factory=list)


class SendRule(BaseModel):
    """Place the field value under ``property`` in the query string or body."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(description="Target: query or body")
    property: str
    value: str = Field(description="Expression producing the value to send")
    property_in_dot_notation: bool = Field(
        default=False, alias="propertyInDotNotation"
    )


class RequestRule(BaseModel):
    """Override parts of the outgoing request (the whole body, or headers)."""

    body: Optional[str] = Field(
        default=None, description="Expression producing the entire request body"
    )
    headers: Optional[dict[str, str]] = None


class RoutingRule(BaseModel):
    """Where a supplied field value is placed in the outgoing request.

    Exactly one of ``send`` (property-level placement) or ``request``
    (whole-body or header placement) is normally set.
    """

    send: Optional[SendRule] = None
    request: Optional[RequestRule] = None


class FieldDescriptor(BaseModel):
    """Compiled description of one user-facing input.

    ``required`` is only ever ``True`` or absent; the host platform treats
    absence as ``False``.
    """

    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(alias="displayName")
    name: str
    type: FieldType
    required: Optional[bool] = None
    default: Any = None
    description: Optional[str] = None
    options: Optional[list[Union[CollectionOption, FieldOption]]] = None
    type_options: Optional[dict[str, Any]] = Field(default=None, alias="typeOptions")
    routing: Optional[RoutingRule] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys, omitting unset optional keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


CollectionOption.model_rebuild()
FieldDescriptor.model_rebuild()


# --- Build output ---


class ResourceOption(BaseModel):
    """A resource (tag) that groups operations in the host platform UI."""

    name: str
    value: str
    description: Optional[str] = None


class CompiledOperation(BaseModel):
    """All compiled fields for one operation (one URL pattern + HTTP method)."""

    name: str
    value: str
    action: str
    description: Optional[str] = None
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    method: HTTPMethod
    pattern: str
    resources: list[str] = Field(default_factory=list)
    fields: list[FieldDescriptor] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class BuildResult(BaseModel):
    """Everything :class:`~specfields.builder.FieldsBuilder` produces for one document."""

    title: str = "Untitled API"
    version: str = "0.0.0"
    resources: list[ResourceOption] = Field(default_factory=list)
    operations: list[CompiledOperation] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise with camelCase keys, omitting unset optional keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def find_operation(self, method: str, pattern: str) -> Optional[CompiledOperation]:
        """Return the compiled operation for *method* and *pattern*, if any."""
        for operation in self.operations:
            if operation.method.value == method.lower() and operation.pattern == pattern:
                return operation
        return None


# --- Configuration ---


class Override(BaseModel):
    """Post-build rewrite of compiled fields.

    Every field whose serialised form (camelCase keys, as in
    :meth:`FieldDescriptor.to_dict`) contains ``find`` gets the keys of
    ``replace`` written over it.  Nested dicts in ``find`` match partially;
    a list in ``find`` matches when each of its entries matches some entry of
    the field's list.

    Example::

        Override(find={"name": "limit"}, replace={"default": 50})
    """

    find: dict[str, Any]
    replace: dict[str, Any]


class BuilderConfig(BaseModel):
    """Settings for :class:`~specfields.builder.FieldsBuilder`.

    Loaded by :func:`~specfields.config.resolve_config` from
    ``./specfields.json`` (or an explicit ``--config`` path), environment
    variables, and CLI flags.
    """

    skip_deprecated: bool = Field(
        default=False, description="Leave deprecated operations out of the build"
    )
    default_tag: str = Field(
        default="default", description="Tag assigned to operations that declare none"
    )
    overrides: list[Override] = Field(
        default_factory=list,
        description="Rewrites applied to every compiled field after the build",
    )
