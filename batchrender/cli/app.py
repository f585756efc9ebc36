"""Main CLI application."""

from __future__ import annotations

import logging
from typing import Optional

import anyio
import typer
from typing_extensions import Annotated

from .. import pipeline
from ..core.errors import BatchRenderError
from ..core.models import GenerateConfig
from ..settings import get_settings
from .parsers import (
    parse_concurrency,
    parse_extension,
    parse_optional_path,
    parse_path,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="batchrender",
    help="Render a tree of Jinja2 templates against JSON/YAML context files.",
    add_completion=False,
)


@app.command()
def generate(
    input_path: Annotated[
        str,
        typer.Option(
            "--inputPath",
            "-i",
            help="Template file or directory to scan (default: cwd).",
            metavar="PATH",
        ),
    ] = "",
    output_path: Annotated[
        str,
        typer.Option(
            "--outputPath",
            "-o",
            help="Base directory for generated files (default: cwd).",
            metavar="DIR",
        ),
    ] = "",
    context_path: Annotated[
        Optional[str],
        typer.Option(
            "--contextPath",
            "-c",
            help="Base context file (.json, .yaml or .yml).",
            metavar="FILE",
        ),
    ] = None,
    relative_context_path: Annotated[
        Optional[str],
        typer.Option(
            "--relativeContextPath",
            help="Context file merged over the base context, looked up next to each template.",
            metavar="NAME",
        ),
    ] = None,
    input_extension: Annotated[
        str,
        typer.Option(
            "--inputExtension",
            help="Template file extension.",
            metavar="EXT",
        ),
    ] = "edge",
    output_extension: Annotated[
        str,
        typer.Option(
            "--outputExtension",
            help="Extension appended to single-output files.",
            metavar="EXT",
        ),
    ] = "html",
    skip_output_extension: Annotated[
        bool,
        typer.Option(
            "--skipOutputExtension",
            help="Name single-output files after the template key, without extension.",
        ),
    ] = False,
    skip_escaping: Annotated[
        bool,
        typer.Option(
            "--skipEscaping",
            help="Do not HTML-escape rendered expressions.",
        ),
    ] = False,
    concurrency: Annotated[
        Optional[int],
        typer.Option(
            "--concurrency",
            help="Maximum number of templates generated at once (default: 5).",
            metavar="N",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Generate files from templates with JSON/YAML driven context."""
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting batchrender")

    config = GenerateConfig(
        input_path=parse_path(input_path),
        output_path=parse_path(output_path),
        context_path=parse_optional_path(context_path),
        relative_context_path=relative_context_path or None,
        input_extension=parse_extension(input_extension, "--inputExtension"),
        output_extension=parse_extension(output_extension, "--outputExtension"),
        skip_output_extension=skip_output_extension,
        escape_output=not skip_escaping,
        concurrency=parse_concurrency(
            concurrency if concurrency is not None else settings.concurrency
        ),
    )

    logger.debug(f"Config: {config.model_dump()}")

    try:
        results = anyio.run(pipeline.generate, config)
    except BatchRenderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    logger.debug(f"Completed: {len(results)} template(s) generated")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
