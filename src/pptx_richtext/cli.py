"""Command-line interface for pptx-richtext."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from pptx_richtext import __version__
from pptx_richtext.core.converter import (
    InputKind,
    RichTextConverter,
    get_sample_html,
    get_sample_rich_text,
)
from pptx_richtext.formats import HTML_EXTENSIONS, SUPPORTED_EXTENSIONS, get_handler
from pptx_richtext.formatting.html_markdown import html_to_markdown

app = typer.Typer(
    name="richtext",
    help="Convert Markdown or editor HTML into styled text runs for slides.",
    add_completion=False,
)
console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pptx-richtext v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route debug logging through rich when verbose output is requested."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def resolve_input_kind(path: Path, requested: InputKind) -> InputKind:
    """Pick the pipeline for a file, honouring an explicit choice."""
    if requested is not InputKind.AUTO:
        return requested
    if path.suffix.lower() in HTML_EXTENSIONS:
        return InputKind.HTML
    return InputKind.AUTO


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Convert rich text into slide-ready styled runs."""


@app.command()
def convert(
    path: Path = typer.Argument(
        ...,
        help="Markdown, text or HTML file to convert",
        exists=True,
        dir_okay=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help=f"Write to a file instead of stdout ({', '.join(SUPPORTED_EXTENSIONS)})",
    ),
    input_format: InputKind = typer.Option(
        InputKind.AUTO,
        "--format",
        "-f",
        help="Input pipeline (auto picks html for .html files or tagged content)",
    ),
    compact: bool = typer.Option(
        False,
        "--compact",
        "-c",
        help="Keep each run's options on one line",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
) -> None:
    """
    Convert a document into a styled run sequence.

    Examples:

        richtext convert notes.md

        richtext convert editor.html --compact

        richtext convert editor.html -o slide.pptx
    """
    configure_logging(verbose)

    try:
        text = get_handler(path.suffix)().read(path)
        converter = RichTextConverter()
        runs = converter.convert(text, resolve_input_kind(path, input_format))

        if output is None:
            typer.echo(converter.format(runs, compact=compact))
        else:
            get_handler(output.suffix)().write(runs, output)
            console.print(f"[green]Success:[/green] {output} ({len(runs)} runs)")
    except Exception as e:
        console.print(f"[red]Error converting {path.name}:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


@app.command("to-markdown")
def to_markdown(
    path: Path = typer.Argument(
        ...,
        help="HTML file to degrade to Markdown notation",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Print the Markdown notation for an HTML file."""
    try:
        html = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error reading {path.name}:[/red] {e}")
        raise typer.Exit(1)
    typer.echo(html_to_markdown(html))


@app.command()
def sample(
    html: bool = typer.Option(
        False,
        "--html",
        help="Print the HTML sample instead of the Markdown one",
    ),
) -> None:
    """Print sample rich text to try the converter with."""
    typer.echo(get_sample_html() if html else get_sample_rich_text())


if __name__ == "__main__":
    app()
