"""Naming policies for operations and resources.

The collectors ask a parser how to label what they collect, so a host
integration can swap naming rules without touching traversal or compilation.
Subclass :class:`DefaultOperationParser` or :class:`DefaultResourceParser`
and override only the methods you need.
"""

from __future__ import annotations

from typing import Any, Optional

from specfields.generator.naming import start_case
from specfields.parser.walker import OperationContext


class DefaultOperationParser:
    """Label operations from ``operationId``, ``summary`` and ``description``.

    Args:
        skip_deprecated: Whether :meth:`should_skip` drops operations marked
            ``deprecated: true``.
    """

    def __init__(self, skip_deprecated: bool = False) -> None:
        self.skip_deprecated = skip_deprecated

    def should_skip(self, operation: dict[str, Any], context: OperationContext) -> bool:
        return self.skip_deprecated and bool(operation.get("deprecated"))

    def name(self, operation: dict[str, Any], context: OperationContext) -> str:
        """Start-cased ``operationId``, or ``"<Method> <pattern words>"`` without one."""
        operation_id = operation.get("operationId")
        if operation_id:
            return start_case(operation_id)
        return start_case(f"{context.method.value} {context.pattern}")

    def value(self, operation: dict[str, Any], context: OperationContext) -> str:
        return self.name(operation, context)

    def action(self, operation: dict[str, Any], context: OperationContext) -> str:
        return operation.get("summary") or self.name(operation, context)

    def description(
        self, operation: dict[str, Any], context: OperationContext
    ) -> Optional[str]:
        return operation.get("description") or operation.get("summary")


class DefaultResourceParser:
    """Label resources (tags) by their start-cased name."""

    def name(self, tag: dict[str, Any]) -> str:
        return start_case(tag["name"])

    def value(self, tag: dict[str, Any]) -> str:
        return tag["name"]

    def description(self, tag: dict[str, Any]) -> Optional[str]:
        return tag.get("description")
