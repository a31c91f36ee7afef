"""Typer application and CLI entry point for specfields.

The root callback configures the global
:class:`~specfields.output.OutputManager` from the shared flags; the
``build`` command and ``inspect`` group are registered at import time.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import sys
from typing import Optional

import typer

from specfields import __version__
from specfields.commands.build import build_command
from specfields.commands.inspect import inspect_app
from specfields.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="specfields",
    help="Compile OpenAPI 3 operations into routed field descriptors.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("build")(build_command)
app.add_typer(inspect_app, name="inspect", help="Inspect compiled operations and fields.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specfields {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write data output to this file."
    ),
) -> None:
    """Install the global output manager before any sub-command runs."""
    from specfields.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )


def main() -> None:
    """CLI entry point invoked by the ``specfields`` console script.

    :class:`~specfields.exceptions.SpecfieldsError` exits with the error's
    ``exit_code``; any other exception exits with
    :data:`~specfields.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from specfields.exceptions import SpecfieldsError
        from specfields.output import error

        if isinstance(exc, SpecfieldsError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
