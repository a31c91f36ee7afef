"""Extract an example value from a schema node.

:class:`SchemaExample` answers "what would a realistic value for this schema
look like?" for the compiler's default-value policy.  Explicit values win in
this order: ``example``, the first entry of ``examples`` (JSON Schema style,
used by OpenAPI 3.1), then ``default``.  When a composite schema has none of
these, an example is assembled from its parts: an object from the examples of
its properties, an array from the example of its items.

``None`` means "no example".  Self-referential schemas are cut off at the
point of recursion.
"""

from __future__ import annotations

from typing import Any, Optional

from specfields.parser.resolver import RefResolver

# Sibling-merged $refs produce fresh dicts, so identity alone cannot catch
# every cycle.
_MAX_DEPTH = 32


class SchemaExample:
    """Example extractor bound to one document (for ``$ref`` resolution)."""

    def __init__(self, document: dict[str, Any], resolver: Optional[RefResolver] = None) -> None:
        self._resolver = resolver or RefResolver(document)

    def extract_example(self, schema: Any) -> Any:
        """Return an example value for *schema*, or ``None`` if there is none."""
        return self._visit(schema, stack=())

    def _visit(self, schema: Any, stack: tuple[int, ...]) -> Any:
        if len(stack) >= _MAX_DEPTH:
            return None
        schema = self._resolver.resolve(schema)
        if not isinstance(schema, dict) or id(schema) in stack:
            return None
        stack = (*stack, id(schema))

        if "example" in schema:
            return schema["example"]
        examples = schema.get("examples")
        if isinstance(examples, list) and examples:
            return examples[0]
        if "default" in schema:
            return schema["default"]

        properties = schema.get("properties")
        if isinstance(properties, dict) and properties:
            composed = {}
            for key, prop in properties.items():
                value = self._visit(prop, stack)
                if value is not None:
                    composed[key] = value
            return composed or None

        if schema.get("type") == "array" and "items" in schema:
            item = self._visit(schema["items"], stack)
            return [item] if item is not None else None

        return None
