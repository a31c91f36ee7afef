"""Routing rules: where a field's value goes in the outgoing request.

A routing rule pairs a placement (query entry, body property, whole body,
header) with a value *expression*.  Expressions are strings in the host
platform's ``={{ ... }}`` template syntax, evaluated against ``$value``
(the user's input for the field) when the request is built.

The expressions used by the compiler are module constants so tests and
callers can compare against them instead of repeating template text.
"""

from __future__ import annotations

from typing import Any

from specfields.models import RequestRule, RoutingRule, SendRule

VALUE = "={{ $value }}"
"""The raw field value."""

PARSED_JSON = "={{ JSON.parse($value) }}"
"""The field's JSON text parsed back into structured data."""

ARRAY_ITEMS = "={{ $value.items ? $value.items.map(item => item.value) : [] }}"
"""Collection items as a list (sent as repeated query entries)."""

ARRAY_ITEMS_CSV = (
    '={{ $value.items ? $value.items.map(item => item.value).join(",") : "" }}'
)
"""Collection items joined with commas into one string."""

BINARY_DATA = "={{ $binary[$value].data }}"
"""Payload of the binary item whose property name is the field value."""

BINARY_MIME_TYPE = "={{ $binary[$value].mimeType }}"
"""Recorded media type of that binary item."""

FORM_STYLE = "form"


def query(name: str, value: str = VALUE) -> RoutingRule:
    """Send *value* under *name* in the query string."""
    return RoutingRule(send=SendRule(type="query", property=name, value=value))


def body_property(key: str, value: str = VALUE) -> RoutingRule:
    """Send *value* as the ``key`` property of the request body."""
    return RoutingRule(send=SendRule(type="body", property=key, value=value))


def whole_body(value: str = VALUE) -> RoutingRule:
    """Send *value* as the entire request body."""
    return RoutingRule(request=RequestRule(body=value))


def header(name: str) -> RoutingRule:
    """Send the raw value as the *name* request header."""
    return RoutingRule(request=RequestRule(headers={name: VALUE}))


def binary_body() -> RoutingRule:
    """Send a referenced binary item as the body, with its media type as ``Content-Type``."""
    return RoutingRule(
        request=RequestRule(body=BINARY_DATA, headers={"Content-Type": BINARY_MIME_TYPE})
    )


def array_query(parameter: dict[str, Any]) -> RoutingRule:
    """Query routing for an array parameter, honouring ``style`` and ``explode``.

    ``form`` with ``explode: false`` joins items with commas
    (``?tags=a,b``).  Every other combination, including the default
    (``form`` + explode) and styles the compiler does not model, repeats the
    query entry once per item (``?tags=a&tags=b``).
    """
    style = parameter.get("style") or FORM_STYLE
    explode = parameter.get("explode") is not False
    if style == FORM_STYLE and not explode:
        return query(parameter["name"], ARRAY_ITEMS_CSV)
    return query(parameter["name"], ARRAY_ITEMS)
