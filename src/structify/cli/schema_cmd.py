"""structify validate-schema: check a schema without calling the model."""
from __future__ import annotations

from pathlib import Path

import typer

from structify.cli._io import load_schema_file


def validate_schema_cmd(
    schema: Path = typer.Argument(..., help="Schema file (.json, .yaml, .yml)."),  # noqa: B008
    max_depth: int = typer.Option(5, "--max-depth", help="Maximum nesting depth."),  # noqa: B008
    max_fields: int = typer.Option(  # noqa: B008
        100, "--max-fields", help="Maximum keys per schema level."
    ),
    show: bool = typer.Option(  # noqa: B008
        False, "--show", help="Print the schema as rendered into the prompt."
    ),
) -> None:
    """Validate a schema file; exit code 1 on the first violation."""
    from structify.core.exceptions import InvalidSchemaError  # noqa: PLC0415
    from structify.prompts.extraction_v1 import render_schema  # noqa: PLC0415
    from structify.schema.nodes import parse_schema  # noqa: PLC0415
    from structify.schema.validator import count_schema_fields  # noqa: PLC0415

    raw = load_schema_file(schema)
    try:
        root = parse_schema(raw, max_depth=max_depth, max_fields=max_fields)
    except InvalidSchemaError as e:
        typer.echo(f"Invalid schema: {e.message}", err=True)
        typer.echo(f"Details: {e.details}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"Schema OK: {count_schema_fields(raw)} fields")
    if show:
        typer.echo("{\n" + render_schema(root) + "\n}")
