"""Classify a resolved schema node into a :class:`~specfields.models.SchemaKind`.

OpenAPI schemas are loosely typed dicts.  The compiler dispatches on a single
:class:`~specfields.models.SchemaKind` value instead of probing keys ad hoc, so
every branch of the type-inference table is an explicit ``if`` on an enum
member.

Rules:

* ``type`` as a string maps to the member of the same value.
* ``type`` as a list (OpenAPI 3.1, e.g. ``["string", "null"]``) uses the
  first non-``null`` entry, or ``null`` if that is all there is.
* No ``type`` but ``properties`` -> ``object``; no ``type`` but ``items``
  -> ``array``; otherwise ``unspecified``.
* An unrecognised ``type`` string is ``unspecified``.
"""

from __future__ import annotations

from typing import Any

from specfields.models import SchemaKind

_KINDS = {kind.value: kind for kind in SchemaKind}


def schema_kind(schema: Any) -> SchemaKind:
    """Return the kind of an already-resolved *schema*."""
    if not isinstance(schema, dict):
        return SchemaKind.UNSPECIFIED

    declared = schema.get("type")
    if isinstance(declared, list):
        non_null = [entry for entry in declared if entry != "null"]
        declared = non_null[0] if non_null else ("null" if declared else None)

    if declared is None:
        if "properties" in schema:
            return SchemaKind.OBJECT
        if "items" in schema:
            return SchemaKind.ARRAY
        return SchemaKind.UNSPECIFIED

    return _KINDS.get(str(declared), SchemaKind.UNSPECIFIED)


def is_scalar(kind: SchemaKind) -> bool:
    """Return ``True`` for the kinds a request body can carry as a bare value."""
    return kind in (
        SchemaKind.STRING,
        SchemaKind.NUMBER,
        SchemaKind.INTEGER,
        SchemaKind.BOOLEAN,
    )
