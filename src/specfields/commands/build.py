"""Build command -- compile an OpenAPI document into field descriptors.

Implements ``specfields build``.  The document is loaded, its version
checked, the builder configuration resolved, and the resulting
:class:`~specfields.models.BuildResult` printed as JSON on stdout (or written
to the ``-o`` file given on the root command).
"""

from __future__ import annotations

from typing import Optional

import typer

from specfields.exceptions import SpecfieldsError
from specfields.models import BuildResult
from specfields.output import debug, error, format_response


def compile_spec(
    spec: str,
    config_path: Optional[str] = None,
    skip_deprecated: Optional[bool] = None,
) -> BuildResult:
    """Load *spec* and build it, turning library errors into a CLI exit.

    Raises:
        typer.Exit: With the error's exit code when loading, configuration,
            or compilation fails.
    """
    from specfields.builder import FieldsBuilder
    from specfields.config import resolve_config
    from specfields.parser import load_spec, validate_openapi_version

    try:
        config = resolve_config(config_path, skip_deprecated)
        document = load_spec(spec)
        version = validate_openapi_version(document)
        debug(f"Loaded OpenAPI {version} document from {spec}")
        return FieldsBuilder(document, config).build()
    except SpecfieldsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def build_command(
    spec: str = typer.Argument(..., help="OpenAPI document path or URL ('-' for stdin)."),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to a specfields.json config file."
    ),
    skip_deprecated: Optional[bool] = typer.Option(
        None,
        "--skip-deprecated/--keep-deprecated",
        help="Leave deprecated operations out (overrides config).",
    ),
) -> None:
    """Compile every operation's parameters and request body into fields.

    Example::

        specfields build petstore.yaml > fields.json
        specfields -o fields.json build https://example.com/openapi.json
    """
    result = compile_spec(spec, config, skip_deprecated)
    format_response(result.to_dict())
