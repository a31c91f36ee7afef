"""Inspect commands -- tabular views of a compiled document.

Provides the ``specfields inspect`` group:

* ``operations`` -- one row per compiled operation.
* ``fields`` -- one row per field of a single operation.
"""

from __future__ import annotations

from typing import Optional

import typer

from specfields.commands.build import compile_spec
from specfields.exit_codes import EXIT_INVALID_USAGE
from specfields.models import FieldDescriptor
from specfields.output import error, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


@inspect_app.command("operations")
def inspect_operations(
    spec: str = typer.Argument(..., help="OpenAPI document path or URL."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file."),
) -> None:
    """List compiled operations with their resources and field counts.

    Example::

        specfields inspect operations petstore.yaml
    """
    result = compile_spec(spec, config)
    if not result.operations:
        info("No operations found in this document.")
        return

    rows = [
        [
            op.method.value.upper(),
            op.pattern,
            op.name,
            ", ".join(op.resources),
            str(len(op.fields)),
        ]
        for op in result.operations
    ]
    get_output().print_table(
        ["Method", "Pattern", "Name", "Resources", "Fields"],
        rows,
        title=f"{result.title} -- Operations ({len(rows)})",
    )


@inspect_app.command("fields")
def inspect_fields(
    spec: str = typer.Argument(..., help="OpenAPI document path or URL."),
    method: str = typer.Argument(..., help="HTTP method, e.g. get."),
    pattern: str = typer.Argument(..., help="URL pattern, e.g. /pets/{petId}."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file."),
) -> None:
    """Show the fields compiled for one operation.

    Example::

        specfields inspect fields petstore.yaml post /pets
    """
    result = compile_spec(spec, config)
    operation = result.find_operation(method, pattern)
    if operation is None:
        error(f"No operation {method.upper()} {pattern} in this document.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    rows = [
        [field.name, field.type.value, "yes" if field.required else "", _target(field)]
        for field in operation.fields
    ]
    get_output().print_table(
        ["Name", "Type", "Required", "Routing"],
        rows,
        title=f"{method.upper()} {pattern} -- Fields ({len(rows)})",
    )


def _target(field: FieldDescriptor) -> str:
    """Short description of where a field's value is sent."""
    if field.routing is None:
        return "path" if field.required else "-"
    if field.routing.send is not None:
        return f"{field.routing.send.type}:{field.routing.send.property}"
    request = field.routing.request
    if request is not None and request.body is not None:
        return "body"
    if request is not None and request.headers:
        return "header:" + ",".join(request.headers)
    return "-"
