"""Field compilation -- turn walked operations into routed field descriptors.

* :mod:`~specfields.generator.fields` -- :class:`FieldCompiler`, the
  schema, parameter, and request-body compiler.
* :mod:`~specfields.generator.schema_kind` -- schema classification.
* :mod:`~specfields.generator.naming` -- labels and field names.
* :mod:`~specfields.generator.routing` -- routing rules and value expressions.
* :mod:`~specfields.generator.parsers` -- operation/resource naming policies.
* :mod:`~specfields.generator.collectors` -- walker visitors that collect
  compiled operations and resources.
* :mod:`~specfields.generator.overrides` -- user overrides applied to
  compiled fields after a build.
"""

from specfields.generator.collectors import OperationsCollector, ResourceCollector
from specfields.generator.fields import FieldCompiler
from specfields.generator.overrides import apply_overrides
from specfields.generator.parsers import DefaultOperationParser, DefaultResourceParser

__all__ = [
    "DefaultOperationParser",
    "DefaultResourceParser",
    "FieldCompiler",
    "OperationsCollector",
    "ResourceCollector",
    "apply_overrides",
]
