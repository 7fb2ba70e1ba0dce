"""Command-line interface for sani."""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from sani import __version__
from sani.config import get_settings
from sani.core.pipeline import InputEncodingError, MarkdownRenderer, RenderError
from sani.render.styles import format_style

# sysexits.h
EXIT_DATAERR = 65
EXIT_UNAVAILABLE = 69

app = typer.Typer(
    name="sani",
    help="Render Markdown to the terminal with italics, bold and strikethrough.",
    add_completion=False,
)
console = Console(stderr=True, soft_wrap=True)

logger = logging.getLogger("sani")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sani v{__version__}")
        raise typer.Exit()


def setup_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def read_stdin() -> bytes:
    """Read the whole input buffer from standard input."""
    return sys.stdin.buffer.read()


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Markdown file to render, or - for standard input",
    ),
    color: Optional[bool] = typer.Option(
        None,
        "--color/--plain",
        help="Force escape codes on or off (default: only when writing to a terminal)",
    ),
    preserve_wrapping: Optional[bool] = typer.Option(
        None,
        "--preserve-wrapping/--fold-wrapping",
        "-w",
        help="Keep single newlines from the source instead of folding them into spaces",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    Render a Markdown file to the terminal.

    Examples:

        sani README.md

        cat notes.md | sani -

        sani notes.md --plain  # No escape codes

        sani notes.md --preserve-wrapping  # Keep source line breaks
    """
    try:
        settings = get_settings()
    except ValueError as e:
        console.print(f"[red]Error:[/red] invalid configuration: {escape(str(e))}")
        raise typer.Exit(EXIT_DATAERR)

    setup_logging("DEBUG" if verbose else settings.log_level)

    if preserve_wrapping is not None:
        settings = settings.model_copy(update={"preserve_wrapping": preserve_wrapping})

    pipeline = MarkdownRenderer(settings=settings, color=color)
    logger.debug(
        "Styles: emphasis=%s strong=%s strikethrough=%s",
        format_style(pipeline.style_map.emphasis),
        format_style(pipeline.style_map.strong),
        format_style(pipeline.style_map.strikethrough),
    )

    try:
        if str(path) == "-":
            pipeline.render_bytes(read_stdin(), sys.stdout)
        else:
            pipeline.render_file(path, sys.stdout)
    except RenderError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_UNAVAILABLE)
    except InputEncodingError as e:
        console.print(f"[red]Error:[/red] {escape(str(path))}: {escape(str(e))}")
        raise typer.Exit(EXIT_DATAERR)


if __name__ == "__main__":
    app()
