# -*- coding: utf-8 -*-
"""LDES Extractor Command Line Interface - time-bounded extractions of versioned event streams."""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import get_settings
from .config.extraction import ExtractorOptions
from .conversion import (
    count_statements,
    load_store,
    member_stream_to_store,
    statements,
    store_to_string,
)
from .errors import ExtractorError
from .extractor import Extractor
from .extractor_util import retrieve_timestamp_property, retrieve_version_of_property
from .timestamps import parse_datetime
from .vocabularies import LDES, RDF, TREE

# Results go to stdout, everything else to stderr
console = Console(stderr=True)

app = typer.Typer(
    name="ldes-extractor",
    help="Create time-bounded extractions of versioned Linked Data Event Streams",
    add_completion=False,
)


def _configure_logging(log_level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


def _parse_date_option(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError:
        raise typer.BadParameter(f"'{value}' is not an ISO-8601 date-time")


def _write(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text)
    else:
        output.write_text(text, encoding='utf-8')
        console.print(f"[dim]Wrote {output}[/dim]")


@app.callback()
def main_callback():
    """LDES Extractor CLI."""
    pass


@app.command()
def version():
    """Show the extractor version."""
    from . import __version__
    console.print(f"[bold blue]ldes-extractor[/bold blue] version [bold green]{__version__}[/bold green]")


@app.command()
def extract(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="RDF file holding the LDES"),
    ldes: str = typer.Option(..., "-l", "--ldes", help="Identifier of the versioned LDES"),
    start: Optional[str] = typer.Option(None, "-s", "--start", help="Window start (ISO-8601, default: epoch)"),
    end: Optional[str] = typer.Option(None, "-e", "--end", help="Window end (ISO-8601, default: now)"),
    version_id: Optional[str] = typer.Option(None, "--version-id", help="Only keep members of this version identifier"),
    extractor_id: Optional[str] = typer.Option(None, "--extractor-id", help="Identifier of the extraction"),
    version_of_path: Optional[str] = typer.Option(None, "--version-of-path", help="Override ldes:versionOfPath"),
    timestamp_path: Optional[str] = typer.Option(None, "--timestamp-path", help="Override ldes:timestampPath"),
    materialize: bool = typer.Option(False, "--materialize/--no-materialize", help="Group per version identifier and re-subject timestamps"),
    input_format: Optional[str] = typer.Option(None, "-f", "--format", help="Input RDF format (guessed from suffix)"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file (default: stdout)"),
    output_format: Optional[str] = typer.Option(None, "--output-format", help="Output RDF format (turtle or trig)"),
    with_metadata: bool = typer.Option(True, "--metadata/--no-metadata", help="Include the extraction metadata"),
    use_async: bool = typer.Option(False, "--async", help="Run through the bounded async pipeline"),
    log_level: Optional[str] = typer.Option(None, "--loglevel", help="Logging level"),
):
    """Extract the members of an LDES that fall within a time window."""
    settings = get_settings()
    _configure_logging(log_level or settings.log_level)

    options = ExtractorOptions(
        ldes_identifier=ldes,
        start_date=_parse_date_option(start),
        end_date=_parse_date_option(end),
        version_identifier=version_id,
        extractor_identifier=extractor_id,
        version_of_path=version_of_path,
        timestamp_path=timestamp_path,
        materialized=materialize,
    )

    try:
        store = load_store(input_path, input_format)
        extractor = Extractor(store, settings=settings)
        if use_async:
            members = asyncio.run(extractor.create_async(options))
        else:
            members = extractor.create(options)
    except (ExtractorError, ValueError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    metadata_store = extractor.get_metadata()
    collection = next(iter(metadata_store.subjects(RDF.type, LDES.EventStream)))
    result = member_stream_to_store(members, str(collection))
    if with_metadata:
        for triple in metadata_store:
            result.add(triple)

    _write(store_to_string(result, output_format), output)

    stats = extractor.last_stats or {}
    table = Table(title=f"Extraction {collection}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    for key in ('mode', 'seen', 'accepted', 'rejected', 'dropped', 'malformed', 'emitted'):
        table.add_row(key, str(stats.get(key, '')))
    console.print(table)


@app.command()
def metadata(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="RDF file holding the LDES"),
    ldes: str = typer.Option(..., "-l", "--ldes", help="Identifier of the versioned LDES"),
    extractor_id: Optional[str] = typer.Option(None, "--extractor-id", help="Identifier of the extraction"),
    input_format: Optional[str] = typer.Option(None, "-f", "--format", help="Input RDF format"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file (default: stdout)"),
):
    """Print the metadata an extraction of the LDES would carry."""
    try:
        store = load_store(input_path, input_format)
        extractor = Extractor(store)
        config = extractor.resolve(ExtractorOptions(ldes_identifier=ldes, extractor_identifier=extractor_id))
        graph = extractor.create_new_metadata(ExtractorOptions(
            ldes_identifier=ldes,
            extractor_identifier=str(config.extractor_identifier),
            version_of_path=str(config.version_of_path),
            timestamp_path=str(config.timestamp_path),
        ))
    except (ExtractorError, ValueError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    _write(store_to_string(graph), output)


@app.command()
def inspect(
    input_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="RDF file to inspect"),
    input_format: Optional[str] = typer.Option(None, "-f", "--format", help="Input RDF format"),
):
    """List the event streams declared in an RDF file."""
    try:
        store = load_store(input_path, input_format)
    except (ValueError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=str(input_path))
    table.add_column("Event stream", style="cyan")
    table.add_column("versionOfPath")
    table.add_column("timestampPath")
    table.add_column("Members", justify="right", style="green")

    streams = sorted({q.subject for q in statements(store, None, RDF.type, LDES.EventStream)},
                     key=lambda term: term.n3())
    for stream in streams:
        try:
            version_path = retrieve_version_of_property(store, str(stream))
        except ExtractorError:
            version_path = "-"
        try:
            time_path = retrieve_timestamp_property(store, str(stream))
        except ExtractorError:
            time_path = "-"
        table.add_row(str(stream), version_path, time_path,
                      str(count_statements(store, stream, TREE.member, None)))

    if not streams:
        console.print("[yellow]No ldes:EventStream found[/yellow]")
    else:
        console.print(table)


def main():
    """Main CLI entry point - equivalent to the 'ldes-extractor' command."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted by user[/dim]")
        sys.exit(1)
