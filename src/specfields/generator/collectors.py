"""Visitors that gather compiled operations and resources during a walk.

Both collectors are plain visitors for
:class:`~specfields.parser.walker.OpenAPIWalker`; they can run in the same
walk through :class:`~specfields.parser.walker.CompositeVisitor`.
"""

from __future__ import annotations

from typing import Any, Optional

from specfields.exceptions import CompileError
from specfields.generator.fields import FieldCompiler
from specfields.generator.parsers import DefaultOperationParser, DefaultResourceParser
from specfields.models import CompiledOperation, ResourceOption
from specfields.output import debug
from specfields.parser.walker import OperationContext


class OperationsCollector:
    """Compile every visited operation into a :class:`~specfields.models.CompiledOperation`.

    Parameters are compiled first, in merged order, then the request body.
    A compile failure is re-raised with the operation's method and pattern
    prepended; the exception class is preserved.

    Attributes:
        operations: Compiled operations in visit order.
    """

    def __init__(
        self,
        compiler: FieldCompiler,
        parser: Optional[DefaultOperationParser] = None,
    ) -> None:
        self._compiler = compiler
        self._parser = parser or DefaultOperationParser()
        self.operations: list[CompiledOperation] = []

    def visit_operation(self, operation: dict[str, Any], context: OperationContext) -> None:
        label = f"{context.method.value.upper()} {context.pattern}"
        if self._parser.should_skip(operation, context):
            debug(f"Skipping {label}")
            return

        try:
            fields = self._compiler.from_parameters(operation.get("parameters"))
            fields.extend(self._compiler.from_request_body(operation.get("requestBody")))
        except CompileError as exc:
            raise type(exc)(f"{label}: {exc}") from exc

        debug(f"Compiled {label}: {len(fields)} field(s)")
        self.operations.append(
            CompiledOperation(
                name=self._parser.name(operation, context),
                value=self._parser.value(operation, context),
                action=self._parser.action(operation, context),
                description=self._parser.description(operation, context),
                operation_id=operation.get("operationId"),
                method=context.method,
                pattern=context.pattern,
                resources=list(operation["tags"]),
                fields=fields,
            )
        )


class ResourceCollector:
    """Collect resources from the ``tags`` list and from operation tags.

    Declared tags keep document order.  Tags that operations use but the
    document never declares are appended on :meth:`finish`, in first-seen
    order.  Each tag appears once.

    Attributes:
        resources: Collected resources; complete after :meth:`finish`.
    """

    def __init__(self, parser: Optional[DefaultResourceParser] = None) -> None:
        self._parser = parser or DefaultResourceParser()
        self._used: list[str] = []
        self.resources: list[ResourceOption] = []

    def visit_operation(self, operation: dict[str, Any], context: OperationContext) -> None:
        for tag in operation["tags"]:
            if tag not in self._used:
                self._used.append(tag)

    def visit_tag(self, tag: dict[str, Any]) -> None:
        self._add(tag)

    def finish(self) -> None:
        for name in self._used:
            self._add({"name": name})

    def _add(self, tag: dict[str, Any]) -> None:
        value = self._parser.value(tag)
        if any(resource.value == value for resource in self.resources):
            return
        self.resources.append(
            ResourceOption(
                name=self._parser.name(tag),
                value=value,
                description=self._parser.description(tag),
            )
        )
