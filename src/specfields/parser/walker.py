"""Walk an OpenAPI document and hand its parts to a visitor.

:class:`OpenAPIWalker` is the only component that understands document
topology.  It knows nothing about fields; it traverses the document in a fixed
order and calls whichever handlers the visitor provides:

1. ``visit_document(document)`` -- once, first.
2. ``visit_operation(operation, context)`` -- for every operation under every
   path, in document (insertion) order.  Only recognised HTTP method keys on a
   path item are operations; ``parameters``, ``summary`` and the like are
   skipped.
3. ``visit_tag(tag)`` -- for every entry of the top-level ``tags`` list.
4. ``finish()`` -- once, last.

Every handler is optional.  A visitor is any object; the walker checks for
each handler by name and silently skips missing ones, so an object with none
of them makes the walk a no-op.

Before an operation reaches the visitor it is normalised:

* an operation without tags gets the single default tag (``"default"``);
* path-scoped parameters are merged into the operation's list.  An
  operation-scoped parameter overrides a path-scoped one with the same
  ``name``.  Path-scoped ``$ref`` parameters are always kept because their
  name is unknown until the compiler resolves them.  The merged order is
  surviving path-scoped parameters followed by all operation-scoped ones.

Normalisation works on a shallow copy: the visitor receives a new operation
dict and the caller's document is left untouched.  Missing ``paths`` or
``tags`` sections are skipped rather than treated as errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from specfields.models import HTTPMethod
from specfields.parser.resolver import is_reference

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)

DEFAULT_TAG = "default"


@dataclass(frozen=True)
class OperationContext:
    """Routing context passed alongside each operation.

    Attributes:
        pattern: The URL pattern (path table key), e.g. ``"/pets/{petId}"``.
        path: The raw path item the operation was found under.
        method: The HTTP method key the operation was found under.
    """

    pattern: str
    path: dict[str, Any]
    method: HTTPMethod


class OpenAPIWalker:
    """Traverse one document, calling visitor handlers in document order.

    Args:
        document: The parsed OpenAPI document.  Never mutated.
        default_tag: Tag assigned to operations that declare none.

    Example::

        class Printer:
            def visit_operation(self, operation, context):
                print(context.method.value.upper(), context.pattern)

        OpenAPIWalker(doc).walk(Printer())
    """

    def __init__(self, document: dict[str, Any], default_tag: str = DEFAULT_TAG) -> None:
        self._document = document
        self._default_tag = default_tag

    def walk(self, visitor: Any) -> None:
        """Run a single top-to-bottom traversal with *visitor*."""
        self._walk_document(visitor)
        self._walk_paths(visitor)
        self._walk_tags(visitor)
        finish = _handler(visitor, "finish")
        if finish is not None:
            finish()

    def _walk_document(self, visitor: Any) -> None:
        visit_document = _handler(visitor, "visit_document")
        if visit_document is not None:
            visit_document(self._document)

    def _walk_paths(self, visitor: Any) -> None:
        paths = self._document.get("paths")
        visit_operation = _handler(visitor, "visit_operation")
        if not paths or visit_operation is None:
            return

        for pattern, path_item in paths.items():
            if not isinstance(path_item, dict):
                continue
            path_parameters = path_item.get("parameters") or []
            for key, operation in path_item.items():
                if key not in _HTTP_METHODS or not isinstance(operation, dict):
                    continue
                normalized = self._normalize(operation, path_parameters)
                context = OperationContext(
                    pattern=pattern, path=path_item, method=HTTPMethod(key)
                )
                visit_operation(normalized, context)

    def _walk_tags(self, visitor: Any) -> None:
        tags = self._document.get("tags")
        visit_tag = _handler(visitor, "visit_tag")
        if not tags or visit_tag is None:
            return
        for tag in tags:
            visit_tag(tag)

    def _normalize(
        self, operation: dict[str, Any], path_parameters: list[Any]
    ) -> dict[str, Any]:
        """Return a copy of *operation* with default tags and merged parameters."""
        normalized = dict(operation)
        if not normalized.get("tags"):
            normalized["tags"] = [self._default_tag]
        normalized["parameters"] = merge_parameters(
            path_parameters, operation.get("parameters") or []
        )
        return normalized


def merge_parameters(
    path_parameters: list[Any], operation_parameters: list[Any]
) -> list[Any]:
    """Merge path-scoped parameters into an operation's parameter list.

    Args:
        path_parameters: Parameters declared on the path item.
        operation_parameters: Parameters declared on the operation.

    Returns:
        A new list: path-scoped parameters not overridden by name (``$ref``
        entries always survive), followed by every operation-scoped parameter.
    """
    overridden = {
        parameter.get("name")
        for parameter in operation_parameters
        if isinstance(parameter, dict) and not is_reference(parameter)
    }
    inherited = [
        parameter
        for parameter in path_parameters
        if is_reference(parameter) or parameter.get("name") not in overridden
    ]
    return [*inherited, *operation_parameters]


class CompositeVisitor:
    """Fan every handler call out to several visitors, in order.

    Each child only receives the calls for handlers it implements, so the
    composite itself always offers all four.
    """

    def __init__(self, *visitors: Any) -> None:
        self._visitors = visitors

    def visit_document(self, document: dict[str, Any]) -> None:
        self._dispatch("visit_document", document)

    def visit_operation(self, operation: dict[str, Any], context: OperationContext) -> None:
        self._dispatch("visit_operation", operation, context)

    def visit_tag(self, tag: dict[str, Any]) -> None:
        self._dispatch("visit_tag", tag)

    def finish(self) -> None:
        self._dispatch("finish")

    def _dispatch(self, name: str, *args: Any) -> None:
        for visitor in self._visitors:
            handler = _handler(visitor, name)
            if handler is not None:
                handler(*args)


def _handler(visitor: Any, name: str) -> Optional[Callable[..., Any]]:
    """Return the visitor's *name* handler if it has a callable one."""
    handler = getattr(visitor, name, None)
    return handler if callable(handler) else None
