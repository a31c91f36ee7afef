"""Build field descriptors for every operation in a document.

:class:`FieldsBuilder` is the library entry point.  It wires one
:class:`~specfields.generator.fields.FieldCompiler` into the collectors,
runs a single walk, applies the configured overrides, and packages the
result::

    from specfields.builder import FieldsBuilder
    from specfields.parser import load_spec

    result = FieldsBuilder(load_spec("petstore.yaml")).build()
    for operation in result.operations:
        print(operation.method.value, operation.pattern, len(operation.fields))
"""

from __future__ import annotations

from typing import Any, Optional

from specfields.generator.collectors import OperationsCollector, ResourceCollector
from specfields.generator.fields import FieldCompiler
from specfields.generator.overrides import apply_overrides
from specfields.generator.parsers import DefaultOperationParser, DefaultResourceParser
from specfields.models import BuildResult, BuilderConfig
from specfields.output import debug
from specfields.parser.walker import CompositeVisitor, OpenAPIWalker


class FieldsBuilder:
    """Compile a whole document into a :class:`~specfields.models.BuildResult`.

    Args:
        document: The parsed OpenAPI document.  Never mutated.
        config: Builder settings; defaults when omitted.
        operation_parser: Naming policy for operations.  Defaults to a
            :class:`~specfields.generator.parsers.DefaultOperationParser`
            honouring ``config.skip_deprecated``.
        resource_parser: Naming policy for resources.
        operations_collector: Collector class instantiated once per build as
            ``operations_collector(compiler, operation_parser)``.  Subclass
            :class:`~specfields.generator.collectors.OperationsCollector` to
            change how operations are recorded.
        resource_collector: Collector class instantiated once per build as
            ``resource_collector(resource_parser)``.
    """

    def __init__(
        self,
        document: dict[str, Any],
        config: Optional[BuilderConfig] = None,
        operation_parser: Optional[DefaultOperationParser] = None,
        resource_parser: Optional[DefaultResourceParser] = None,
        operations_collector: type[OperationsCollector] = OperationsCollector,
        resource_collector: type[ResourceCollector] = ResourceCollector,
    ) -> None:
        self._document = document
        self._config = config or BuilderConfig()
        self._operation_parser = operation_parser or DefaultOperationParser(
            skip_deprecated=self._config.skip_deprecated
        )
        self._resource_parser = resource_parser or DefaultResourceParser()
        self._operations_collector = operations_collector
        self._resource_collector = resource_collector
        self._info: dict[str, Any] = {}

    def visit_document(self, document: dict[str, Any]) -> None:
        self._info = document.get("info") or {}
        debug(f"Building fields for {self._info.get('title', 'untitled document')}")

    def build(self) -> BuildResult:
        """Walk the document once and return every compiled operation and resource.

        Raises:
            CompileError: If any operation cannot be compiled.
            SpecParseError: If a ``$ref`` cannot be resolved.
            ConfigError: If an override produces an invalid field.
        """
        operations = self._operations_collector(
            FieldCompiler(self._document), self._operation_parser
        )
        resources = self._resource_collector(self._resource_parser)
        walker = OpenAPIWalker(self._document, default_tag=self._config.default_tag)
        walker.walk(CompositeVisitor(self, resources, operations))

        for operation in operations.operations:
            operation.fields = apply_overrides(operation.fields, self._config.overrides)

        return BuildResult(
            title=str(self._info.get("title", "Untitled API")),
            version=str(self._info.get("version", "0.0.0")),
            resources=resources.resources,
            operations=operations.operations,
        )
