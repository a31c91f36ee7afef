"""Resolve ``$ref`` JSON Reference pointers one node at a time.

The compiler never dereferences inline.  Whenever it needs to look inside a
parameter, request body, or schema it hands the node to
:meth:`RefResolver.resolve`, which follows ``{"$ref": "#/..."}`` indirections
until it reaches a concrete node.

Resolution is lazy (only nodes the compiler actually inspects are touched),
so self-referential schemas such as trees are harmless: the compiler looks
one level deep and never asks for the recursive branch.  A reference *chain*
that loops back on itself without ever reaching a concrete node is a broken
document and raises :class:`~specfields.exceptions.SpecParseError`.

Only internal references (``#/...``) are supported.
"""

from __future__ import annotations

from typing import Any

from specfields.exceptions import SpecParseError


def is_reference(node: Any) -> bool:
    """Return ``True`` if *node* is a ``{"$ref": ...}`` indirection object."""
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


class RefResolver:
    """Follow ``$ref`` pointers against a single OpenAPI document.

    Args:
        document: The root document every pointer is resolved against.  It
            is read, never modified.

    Example::

        resolver = RefResolver(doc)
        schema = resolver.resolve({"$ref": "#/components/schemas/Pet"})
        schema["type"]  # "object"
    """

    def __init__(self, document: dict[str, Any]) -> None:
        self._document = document

    def resolve(self, node: Any) -> Any:
        """Return the concrete node *node* points to.

        Follows any number of chained references.  Calling ``resolve`` on an
        already-concrete node returns it unchanged, so the operation is
        idempotent.

        Keys next to ``$ref`` (allowed by OpenAPI 3.1, e.g. a local
        ``description``) are layered over the target in a shallow copy.

        Raises:
            SpecParseError: If a pointer is external, dangling, or the chain
                is cyclic.
        """
        seen: list[str] = []
        overrides: dict[str, Any] = {}
        while is_reference(node):
            ref = node["$ref"]
            if ref in seen:
                chain = " -> ".join([*seen, ref])
                raise SpecParseError(f"Circular $ref chain: {chain}")
            seen.append(ref)
            # Nearer siblings win over those found further down the chain.
            for key, value in node.items():
                if key != "$ref":
                    overrides.setdefault(key, value)
            node = self._lookup(ref)

        if overrides and isinstance(node, dict):
            return {**node, **overrides}
        return node

    def _lookup(self, ref: str) -> Any:
        """Navigate the document along the JSON Pointer in *ref* (RFC 6901)."""
        if not ref.startswith("#/"):
            raise SpecParseError(
                f"External $ref not supported: {ref}. "
                "Only internal references (#/...) are handled."
            )

        current: Any = self._document
        for segment in ref[2:].split("/"):
            segment = segment.replace("~1", "/").replace("~0", "~")
            if isinstance(current, dict):
                if segment not in current:
                    raise SpecParseError(
                        f"Cannot resolve $ref '{ref}': key '{segment}' not found at path"
                    )
                current = current[segment]
            elif isinstance(current, list):
                try:
                    current = current[int(segment)]
                except (ValueError, IndexError) as exc:
                    raise SpecParseError(
                        f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                    ) from exc
            else:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': "
                    f"cannot navigate into {type(current).__name__}"
                )
        return current
