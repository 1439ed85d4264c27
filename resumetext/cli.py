"""
Command-line interface for resumetext.
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from resumetext import __version__
from resumetext.core.options import ExtractionOptions
from resumetext.core.utils import Diagnostic, ExtractionLog
from resumetext.exceptions import UnreadableDocumentError
from resumetext.extractor import extract_file
from resumetext.pdf.locator import locate_streams

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    resumetext - recover plain text from PDF and DOCX résumés.
    """
    pass


@cli.command(name="extract")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print a JSON report instead of plain text")
@click.option("--limit", type=int, default=None, help="Truncate text to this many characters")
@click.option("--min-length", type=int, default=None, help="Minimum usable text length")
@click.option("--preserve-lines", is_flag=True, help="Separate positioned text blocks with newlines")
@click.option("--verbose", "-v", is_flag=True, help="Show extraction diagnostics")
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the result to a file instead of stdout",
)
def extract(path, as_json, limit, min_length, preserve_lines, verbose, output):
    """
    Extract plain text from a PDF, DOCX or text file.

    Examples:

        resumetext extract resume.pdf

        resumetext extract resume.docx --json --limit 2000
    """
    options = ExtractionOptions().with_updates(
        min_usable_length=min_length,
        preserve_line_breaks=preserve_lines or None,
    )
    log = ExtractionLog()
    try:
        result = extract_file(path, options=options, log=log)
    except UnreadableDocumentError as exc:
        err_console.print(f"[bold red]✗ Error:[/bold red] {exc.message}")
        err_console.print(f"[dim]Extracted {exc.extracted_length} usable characters.[/dim]")
        if verbose:
            _print_diagnostics(log)
        sys.exit(1)

    if as_json:
        payload = result.as_dict(limit=limit)
        payload["filename"] = Path(path).name
        rendered = json.dumps(payload, ensure_ascii=False, indent=2)
    else:
        rendered = result.excerpt(limit) if limit else result.text

    if output:
        Path(output).write_text(rendered + "\n", encoding="utf-8")
        err_console.print(f"[bold green]✓ Wrote {result.length} characters to {output}[/bold green]")
    else:
        click.echo(rendered)

    if verbose:
        _print_diagnostics(log)


@cli.command(name="streams")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def streams(path):
    """
    List the streams found in a PDF and how each was classified.
    """
    data = Path(path).read_bytes()
    records = locate_streams(data, window=ExtractionOptions().dictionary_window)

    table = Table(title=f"Streams in {Path(path).name}")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Bytes", justify="right")
    table.add_column("Kind", style="green")
    table.add_column("Dictionary", overflow="fold")

    for index, record in enumerate(records):
        table.add_row(
            str(index),
            str(record.start),
            str(record.end),
            str(record.length),
            record.kind.value,
            " ".join(record.dictionary.split())[:80],
        )

    console.print(table)
    console.print(f"[dim]{len(records)} stream(s) located[/dim]")


def _print_diagnostics(log: ExtractionLog):
    table = Table(title="Diagnostics", show_header=True)
    table.add_column("Kind", style="cyan")
    table.add_column("Message")
    for kind, message in log.records:
        if kind is Diagnostic.STREAM_LOCATED:
            continue
        table.add_row(kind.value, message)
    err_console.print(table)


if __name__ == "__main__":  # pragma: no cover
    cli()
