"""specfields -- Compile OpenAPI 3 operations into routed field descriptors.

Given a parsed OpenAPI document, specfields walks every operation, merges
path- and operation-scoped parameters, and compiles each parameter and
request body into a :class:`~specfields.models.FieldDescriptor`: a
presentation type, label, default, optional choices, and a routing rule that
places the user's value into the query string, a header, the path, or the
body of the outgoing request.

Typical usage::

    from specfields.builder import FieldsBuilder
    from specfields.parser import load_spec

    result = FieldsBuilder(load_spec("openapi.yaml")).build()

Modules:
    app: Typer application and CLI entry point.
    builder: One-call compilation of a whole document.
    config: Builder configuration with precedence resolution.
    models: Pydantic models shared across the package.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich support.
    parser: Loading, ``$ref`` resolution, examples, and the document walker.
    generator: The field compiler, naming, routing, and collectors.
"""

__version__ = "0.1.0"
