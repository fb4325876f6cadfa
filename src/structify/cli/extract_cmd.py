"""structify extract: extract structured data from a text file."""
from __future__ import annotations

from pathlib import Path

import typer

from structify.cli._io import load_schema_file, read_text_input


def extract(
    input_path: Path = typer.Argument(  # noqa: B008
        ..., metavar="INPUT", help="Text file to extract from ('-' for stdin)."
    ),
    schema: Path = typer.Option(  # noqa: B008
        ..., "--schema", "-s", help="Schema file (.json, .yaml, .yml)."
    ),
    output: Path | None = typer.Option(  # noqa: B008
        None, "--output", "-o", help="Write the JSON result here instead of stdout."
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="YAML config file (API key may come from env)."
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Model override."),  # noqa: B008
    timeout_s: float | None = typer.Option(  # noqa: B008
        None, "--timeout", help="Per-request timeout in seconds."
    ),
    max_retries: int | None = typer.Option(  # noqa: B008
        None, "--max-retries", help="Total attempts against the model."
    ),
    debug: bool = typer.Option(  # noqa: B008
        False, "--debug", help="Log the prompt and raw model response to stderr."
    ),
) -> None:
    """Extract structured data from INPUT according to a schema."""
    import asyncio  # noqa: PLC0415
    import json  # noqa: PLC0415

    from structify.config import get_config, load_config  # noqa: PLC0415
    from structify.core.exceptions import StructifyError  # noqa: PLC0415
    from structify.core.models import ExtractOptions  # noqa: PLC0415
    from structify.extractor import ExtractionPipeline  # noqa: PLC0415
    from structify.utils.logging import configure_logging  # noqa: PLC0415

    configure_logging(verbose=debug)

    raw_schema = load_schema_file(schema)
    text = read_text_input(input_path)
    options = ExtractOptions(
        model=model, timeout_s=timeout_s, max_retries=max_retries, debug=debug
    )

    async def _run() -> dict:  # type: ignore[type-arg]
        cfg = load_config(config) if config is not None else get_config()
        async with ExtractionPipeline(cfg) as pipeline:
            return await pipeline.extract(text, raw_schema, options)

    try:
        result = asyncio.run(_run())
    except StructifyError as e:
        typer.echo(f"Error [{e.code.value}]: {e.message}", err=True)
        raise typer.Exit(code=1) from e
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    rendered = json.dumps(result, indent=2, ensure_ascii=False)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered + "\n", encoding="utf-8")
        typer.echo(f"[extract] Result saved to {output}", err=True)
    else:
        typer.echo(rendered)
