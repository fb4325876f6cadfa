"""File helpers shared by CLI commands."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import typer
import yaml


def load_schema_file(path: Path) -> Any:  # noqa: ANN401
    """Read a raw schema from a JSON or YAML file, exiting on failure."""
    if not path.exists():
        typer.echo(f"Error: Schema file not found: {path}", err=True)
        raise typer.Exit(code=1)

    content = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(content)
        return json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        typer.echo(f"Error: Could not parse schema file {path}: {e}", err=True)
        raise typer.Exit(code=1) from e


def read_text_input(path: Path) -> str:
    """Read source text from a file, or stdin when ``path`` is ``-``."""
    if str(path) == "-":
        return sys.stdin.read()
    if not path.exists():
        typer.echo(f"Error: Input file not found: {path}", err=True)
        raise typer.Exit(code=1)
    return path.read_text(encoding="utf-8")
