"""Structify CLI, a Typer application."""
from __future__ import annotations

import typer

from structify.cli.extract_cmd import extract
from structify.cli.schema_cmd import validate_schema_cmd

app = typer.Typer(
    name="structify",
    help="Structify: extract schema-shaped data from messy text.",
    add_completion=False,
    no_args_is_help=True,
)

app.command(name="extract")(extract)
app.command(name="validate-schema")(validate_schema_cmd)


@app.command()
def version() -> None:
    """Print the installed Structify version."""
    from structify import __version__  # noqa: PLC0415

    typer.echo(f"structify {__version__}")
