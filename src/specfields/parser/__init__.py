"""OpenAPI document access -- load, dereference, and walk.

This sub-package is the first half of the specfields pipeline:

* :mod:`~specfields.parser.loader` -- I/O layer (URL, file, stdin) plus
  format detection and OpenAPI version validation.
* :mod:`~specfields.parser.resolver` -- lazy, per-node ``$ref`` resolution.
* :mod:`~specfields.parser.examples` -- example values for schemas.
* :mod:`~specfields.parser.walker` -- document traversal with a
  capability-checked visitor.

Typical usage::

    from specfields.parser import OpenAPIWalker, load_spec, validate_openapi_version

    doc = load_spec("petstore.yaml")
    validate_openapi_version(doc)
    OpenAPIWalker(doc).walk(my_visitor)
"""

from specfields.parser.examples import SchemaExample
from specfields.parser.loader import load_spec, validate_openapi_version
from specfields.parser.resolver import RefResolver
from specfields.parser.walker import CompositeVisitor, OpenAPIWalker, OperationContext

__all__ = [
    "CompositeVisitor",
    "OpenAPIWalker",
    "OperationContext",
    "RefResolver",
    "SchemaExample",
    "load_spec",
    "validate_openapi_version",
]
