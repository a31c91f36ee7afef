"""Compile OpenAPI parameters and request bodies into field descriptors.

:class:`FieldCompiler` turns the inputs of one operation into
:class:`~specfields.models.FieldDescriptor` objects.  Each descriptor says
how the input is presented (type, label, default, choices) and, through its
:class:`~specfields.models.RoutingRule`, where the value goes in the request.

**Type inference** (:meth:`FieldCompiler.from_schema`)

=================  ===========  =============================================
Schema kind        Field type   Default without an example
=================  ===========  =============================================
boolean            boolean      ``False``
string / untyped   string       none
object, array      json         none; an example is pretty-printed as JSON
number, integer    number       none
=================  ===========  =============================================

A schema with ``enum`` becomes an ``options`` field whatever its kind; the
default is the inferred default if there is one, else the first literal.

Only the top level of a schema becomes a field.  Anything nested below an
object property or array is edited as JSON text.

**Parameters** (:meth:`FieldCompiler.from_parameter`) are routed by location:
query entries, header values, or path substitution (path fields are simply
marked required).  Array-typed query parameters become repeatable
``fixedCollection`` fields.

**Request bodies** (:meth:`FieldCompiler.from_request_body`) become one field
per top-level property of an object schema, or a single ``body`` field for
array and scalar schemas.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from specfields.exceptions import (
    EmptyContentError,
    MissingSchemaError,
    UnknownParameterLocationError,
    UnsupportedBodyShapeError,
)
from specfields.generator import routing
from specfields.generator.naming import (
    parameter_field_name,
    property_field_name,
    start_case,
)
from specfields.generator.schema_kind import is_scalar, schema_kind
from specfields.models import (
    CollectionOption,
    FieldDescriptor,
    FieldOption,
    FieldType,
    ParameterLocation,
    SchemaKind,
)
from specfields.parser.examples import SchemaExample
from specfields.parser.resolver import RefResolver

_JSON_MEDIA_RE = re.compile(r"^application/(?:[\w.-]+\+)?json(?:\s*;.*)?$", re.IGNORECASE)
_WILDCARD_MEDIA_RE = re.compile(r"^(?:\*|[\w.+-]+)/\*(?:\s*;.*)?$")


def find_json_media(content: Optional[dict[str, Any]]) -> Optional[tuple[str, Any]]:
    """Return the first ``(media_type, media_object)`` with a JSON media type."""
    for media_type, media in (content or {}).items():
        if _JSON_MEDIA_RE.match(media_type):
            return media_type, media
    return None


def select_body_content(content: dict[str, Any]) -> tuple[str, Any]:
    """Pick the media type a request body is compiled from.

    JSON wins, then a wildcard (``*/*``, ``image/*``), then the first media
    type in document order.

    Raises:
        EmptyContentError: If *content* is empty.
    """
    if not content:
        raise EmptyContentError("Request body declares no content")
    match = find_json_media(content)
    if match is not None:
        return match
    for media_type, media in content.items():
        if _WILDCARD_MEDIA_RE.match(media_type):
            return media_type, media
    return next(iter(content.items()))


def combine(*sources: dict[str, Any]) -> FieldDescriptor:
    """Build a descriptor from partial key sets; earlier sources win.

    ``None`` values never win, so a later source can fill them.  A falsy
    ``required`` is dropped entirely.
    """
    merged: dict[str, Any] = {}
    for source in sources:
        for key, value in source.items():
            if value is not None and key not in merged:
                merged[key] = value
    if not merged.get("required"):
        merged.pop("required", None)
    return FieldDescriptor(**merged)


class FieldCompiler:
    """Compile parameters, schemas, and request bodies of one document.

    Args:
        document: The document all ``$ref`` pointers are resolved against.
        resolver: Optional shared :class:`~specfields.parser.resolver.RefResolver`.
        examples: Optional shared :class:`~specfields.parser.examples.SchemaExample`.
    """

    def __init__(
        self,
        document: dict[str, Any],
        resolver: Optional[RefResolver] = None,
        examples: Optional[SchemaExample] = None,
    ) -> None:
        self._resolver = resolver or RefResolver(document)
        self._examples = examples or SchemaExample(document, self._resolver)

    # ------------------------------------------------------------------ #
    # Schemas
    # ------------------------------------------------------------------ #

    def from_schema(self, schema: Any) -> dict[str, Any]:
        """Infer ``type``, ``default``, ``description`` and ``options`` for *schema*.

        Returns:
            A partial key set for :func:`combine`.
        """
        schema = self._resolver.resolve(schema) or {}
        kind = schema_kind(schema)
        example = self._examples.extract_example(schema)

        if kind is SchemaKind.BOOLEAN:
            field_type = FieldType.BOOLEAN
            default = example if example is not None else False
        elif kind in (SchemaKind.OBJECT, SchemaKind.ARRAY):
            field_type = FieldType.JSON
            default = _pretty_json(example) if example is not None else None
        elif kind in (SchemaKind.NUMBER, SchemaKind.INTEGER):
            field_type = FieldType.NUMBER
            default = example
        else:
            field_type = FieldType.STRING
            default = example

        keys: dict[str, Any] = {
            "type": field_type,
            "default": default,
            "description": schema.get("description"),
        }
        literals = schema.get("enum")
        if isinstance(literals, list) and literals:
            keys["type"] = FieldType.OPTIONS
            keys["options"] = [
                FieldOption(name=_option_label(literal), value=literal) for literal in literals
            ]
            keys["default"] = default if default is not None else literals[0]
        return keys

    def from_schema_property(self, name: str, schema: Any) -> FieldDescriptor:
        """Compile one object property into a field named after *name*."""
        return combine(
            {"display_name": start_case(name), "name": property_field_name(name)},
            self.from_schema(schema),
        )

    # ------------------------------------------------------------------ #
    # Parameters
    # ------------------------------------------------------------------ #

    def from_parameters(self, parameters: Optional[list[Any]]) -> list[FieldDescriptor]:
        """Compile every parameter, preserving order."""
        return [self.from_parameter(parameter) for parameter in parameters or []]

    def from_parameter(self, parameter: Any) -> FieldDescriptor:
        """Compile one parameter into a routed field.

        Raises:
            MissingSchemaError: If the parameter has no schema, directly or
                under a JSON media type in ``content``.
            UnknownParameterLocationError: If ``in`` is not ``query``,
                ``path`` or ``header``.
        """
        parameter = self._resolver.resolve(parameter)
        name = parameter.get("name", "")
        schema = self._resolver.resolve(self._parameter_schema(parameter))
        try:
            location = ParameterLocation(parameter.get("in"))
        except ValueError:
            raise UnknownParameterLocationError(
                f"Unknown parameter location '{parameter.get('in')}' for parameter '{name}'"
            ) from None

        is_array_query = (
            location is ParameterLocation.QUERY and schema_kind(schema) is SchemaKind.ARRAY
        )
        location_keys: dict[str, Any] = {}
        if location is ParameterLocation.PATH:
            location_keys["required"] = True
        elif location is ParameterLocation.HEADER:
            location_keys["routing"] = routing.header(name)
        elif is_array_query:
            location_keys["routing"] = routing.array_query(parameter)
        else:
            location_keys["routing"] = routing.query(name)

        parameter_keys = {
            "display_name": start_case(name),
            "name": parameter_field_name(name),
            "required": parameter.get("required"),
            "description": parameter.get("description") or None,
        }
        if is_array_query:
            schema_keys = self._from_array_query_parameter(schema, parameter)
        else:
            parameter_keys["default"] = parameter.get("example")
            schema_keys = self.from_schema(schema)

        return combine(location_keys, parameter_keys, schema_keys)

    def _parameter_schema(self, parameter: dict[str, Any]) -> Any:
        if parameter.get("schema") is not None:
            return parameter["schema"]
        match = find_json_media(parameter.get("content"))
        if match is not None:
            media = self._resolver.resolve(match[1]) or {}
            if media.get("schema") is not None:
                return media["schema"]
        raise MissingSchemaError(
            f"Parameter '{parameter.get('name', '')}' has neither a schema "
            "nor JSON content with a schema"
        )

    def _from_array_query_parameter(
        self, schema: dict[str, Any], parameter: dict[str, Any]
    ) -> dict[str, Any]:
        """Key set for a repeatable ``fixedCollection`` holding one ``value`` per item."""
        items = self._resolver.resolve(schema.get("items")) or {}
        item_keys = self.from_schema(items)
        if not item_keys.get("description"):
            item_keys["description"] = f"Item value ({schema_kind(items).value})"
        value_field = combine({"display_name": "Value", "name": "value"}, item_keys)

        example = parameter.get("example")
        if not isinstance(example, list):
            example = self._examples.extract_example(schema)
        default: dict[str, Any] = {}
        if isinstance(example, list) and example:
            default = {"items": [{"value": value} for value in example]}

        return {
            "type": FieldType.FIXED_COLLECTION,
            "default": default,
            "description": schema.get("description"),
            "type_options": {"multipleValues": True},
            "options": [
                CollectionOption(name="items", display_name="Items", values=[value_field])
            ],
        }

    # ------------------------------------------------------------------ #
    # Request bodies
    # ------------------------------------------------------------------ #

    def from_request_body(self, body: Any) -> list[FieldDescriptor]:
        """Compile a request body into one or more routed fields.

        Raises:
            EmptyContentError: If the body declares no media types.
            UnsupportedBodyShapeError: If the schema is neither an array, an
                object, nor a string/number/integer/boolean.  An untyped
                schema under a wildcard media type compiles to the binary
                field instead.
        """
        if body is None:
            return []
        body = self._resolver.resolve(body)
        media_type, media = select_body_content(body.get("content") or {})
        media = self._resolver.resolve(media) or {}
        schema = self._resolver.resolve(media.get("schema")) or {}
        kind = schema_kind(schema)
        properties = schema.get("properties")
        body_keys = {
            "display_name": "Body",
            "name": "body",
            "required": body.get("required"),
        }

        if kind is SchemaKind.ARRAY:
            return [
                combine(
                    body_keys,
                    {"routing": routing.whole_body(routing.PARSED_JSON)},
                    self.from_schema(schema),
                    {"description": body.get("description")},
                )
            ]
        if isinstance(properties, dict) and properties:
            return self._from_body_properties(schema)
        if kind is SchemaKind.OBJECT:
            return [
                combine(
                    body_keys,
                    {"type": FieldType.JSON, "routing": routing.whole_body(routing.PARSED_JSON)},
                    self.from_schema(schema),
                    {"description": body.get("description")},
                )
            ]
        # An untyped payload under a wildcard media type is raw bytes.
        if kind in (SchemaKind.STRING, SchemaKind.UNSPECIFIED) and _WILDCARD_MEDIA_RE.match(
            media_type
        ):
            return [self._binary_body_field(body)]
        if is_scalar(kind):
            return [
                combine(
                    body_keys,
                    {"routing": routing.whole_body()},
                    self.from_schema(schema),
                    {"description": body.get("description")},
                )
            ]
        raise UnsupportedBodyShapeError(
            f"Request body schema type '{schema.get('type')}' ({media_type}) not supported"
        )

    def _from_body_properties(self, schema: dict[str, Any]) -> list[FieldDescriptor]:
        required = set(schema.get("required") or [])
        fields = []
        for key, prop in schema["properties"].items():
            schema_keys = self.from_schema(prop)
            value = routing.PARSED_JSON if schema_keys["type"] is FieldType.JSON else routing.VALUE
            fields.append(
                combine(
                    {
                        "display_name": start_case(key),
                        "name": property_field_name(key),
                        "required": key in required,
                        "routing": routing.body_property(key, value),
                    },
                    schema_keys,
                )
            )
        return fields

    def _binary_body_field(self, body: dict[str, Any]) -> FieldDescriptor:
        return combine(
            {
                "display_name": "Input Binary Field",
                "name": "binaryPropertyName",
                "type": FieldType.STRING,
                "default": "data",
                "required": body.get("required"),
                "description": "The name of the input field containing the binary data to send",
                "routing": routing.binary_body(),
            }
        )


def _pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _option_label(literal: Any) -> str:
    if literal is None:
        return "Null"
    return start_case(literal)
