"""CLI commands for uploading and managing analyzed documents."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import DocAnalyzerConfig, get_config_manager
from ..core import DocumentProcessor, ProcessingResult, compute_collection_stats
from ..errors import DocAnalyzerError
from ..extraction import SourceFile
from ..models import AnalyzedDocument
from ..report import ReportRenderer
from ..utils.logging import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)

TYPE_STYLES = {
    "Resume": "blue",
    "Invoice": "green",
    "Legal Agreement": "red",
    "Research Paper": "magenta",
    "Others": "white",
}

SENTIMENT_STYLES = {
    "positive": "green",
    "neutral": "white",
    "negative": "red",
}


def load_config(ctx) -> DocAnalyzerConfig:
    """Load configuration (defaults if no file exists) and apply logging settings."""
    config_manager = get_config_manager(ctx.obj.get("config_path"))
    config = config_manager.load(create_if_missing=True)
    setup_logging(
        level=config.logging.level,
        log_dir=config.logging.log_dir,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
        console_enabled=config.logging.console_enabled,
        file_enabled=config.logging.file_enabled,
    )
    return config


def _fail(message: str):
    console.print(f"[bold red]✗ {message}[/bold red]")
    sys.exit(1)


def get_processor(ctx) -> DocumentProcessor:
    try:
        return DocumentProcessor(config=load_config(ctx))
    except ValueError as e:
        _fail(f"Invalid configuration: {e}")


def _report_failure(result: ProcessingResult):
    _fail(f"{result.operation.value.capitalize()} failed: {result.error_message}")


def display_document(document: AnalyzedDocument, full: bool = False):
    """Display a document's analysis in a formatted panel."""
    metrics = document.metadata

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Label", style="cyan")
    table.add_column("Value")

    type_style = TYPE_STYLES.get(document.type, "white")
    sentiment_style = SENTIMENT_STYLES.get(metrics.sentiment, "white")

    table.add_row("ID", document.id)
    table.add_row("Type", f"[{type_style}]{document.type}[/{type_style}]")
    table.add_row("Date", document.date)
    table.add_row("Words", str(metrics.word_count))
    table.add_row("Reading Time", f"{metrics.reading_time} min")
    if metrics.page_count is not None:
        table.add_row("Pages", str(metrics.page_count))
    table.add_row("Sentiment", f"[{sentiment_style}]{metrics.sentiment}[/{sentiment_style}]")
    table.add_row("Tags", ", ".join(document.tags) if document.tags else "(none)")

    console.print()
    console.print(Panel(table, title=f"[bold cyan]{document.name}[/bold cyan]", border_style="cyan"))
    console.print(f"[bold]Summary:[/bold] {document.summary}")
    if document.insights:
        console.print(f"\n[bold]Insights:[/bold] {document.insights}")

    if full:
        console.print("\n[bold]Extracted Text:[/bold]")
        console.print(document.full_text, markup=False, highlight=False)
    console.print()


@click.command(name="upload")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--media-type",
    help="Declared media type (guessed from the file name when omitted)",
)
@click.pass_context
def upload_command(ctx, path: Path, media_type: Optional[str]):
    """
    Extract, analyze and store a document.

    Supports PDF, DOCX, TXT and ZIP archives of those (max 10MB by default).
    """
    processor = get_processor(ctx)
    try:
        source = SourceFile.from_path(path, media_type=media_type)
    except OSError as e:
        _fail(f"Could not read {path}: {e}")

    with console.status(f"[cyan]Processing[/cyan] {source.name}..."):
        result = processor.upload(source)

    if not result.success:
        _report_failure(result)

    document = result.document
    console.print(
        f"[green]✓[/green] Extracted {document.metadata.word_count} words and analyzed "
        f"{document.name} as [bold]{document.type}[/bold]"
    )
    if result.used_fallback_analysis:
        console.print("[yellow]⚠ The analysis reply was unreadable; default analysis values were used[/yellow]")
    display_document(document)


@click.command(name="list")
@click.pass_context
def list_command(ctx):
    """List stored documents, newest first."""
    try:
        documents = get_processor(ctx).list_documents()
    except DocAnalyzerError as e:
        _fail(f"Error: {e}")

    if not documents:
        console.print("[yellow]No documents uploaded yet.[/yellow]")
        return

    table = Table(title=f"Documents ({len(documents)})", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Date")
    table.add_column("Words", justify="right")
    table.add_column("Tags")

    for doc in documents:
        tags = ", ".join(doc.tags[:3])
        if len(doc.tags) > 3:
            tags += f" +{len(doc.tags) - 3}"
        style = TYPE_STYLES.get(doc.type, "white")
        table.add_row(
            doc.id[:8],
            doc.name,
            f"[{style}]{doc.type}[/{style}]",
            doc.date,
            str(doc.metadata.word_count),
            tags,
        )

    console.print(table)


def _resolve(processor: DocumentProcessor, doc_id: str) -> AnalyzedDocument:
    """Find a document by full id or unique id prefix."""
    matches = [doc for doc in processor.list_documents() if doc.id.startswith(doc_id)]
    if not matches:
        _fail(f"No document with id {doc_id}")
    if len(matches) > 1:
        _fail(f"Id prefix {doc_id} matches {len(matches)} documents")
    return matches[0]


@click.command(name="show")
@click.argument("doc_id")
@click.option("--full", is_flag=True, help="Also print the extracted text")
@click.pass_context
def show_command(ctx, doc_id: str, full: bool):
    """Show the analysis of one document (DOC_ID may be a prefix)."""
    processor = get_processor(ctx)
    display_document(_resolve(processor, doc_id), full=full)


@click.command(name="reprocess")
@click.argument("doc_id")
@click.pass_context
def reprocess_command(ctx, doc_id: str):
    """Re-run the AI analysis for a stored document."""
    processor = get_processor(ctx)
    document = _resolve(processor, doc_id)

    with console.status(f"[cyan]Reprocessing[/cyan] {document.name}..."):
        result = processor.reprocess(document.id)

    if not result.success:
        _report_failure(result)

    console.print("[green]✓[/green] Analysis has been updated with latest results")
    if result.used_fallback_analysis:
        console.print("[yellow]⚠ The analysis reply was unreadable; default analysis values were used[/yellow]")
    display_document(result.document)


@click.command(name="delete")
@click.argument("doc_id")
@click.confirmation_option(prompt="Delete this document?")
@click.pass_context
def delete_command(ctx, doc_id: str):
    """Remove a document from the collection."""
    processor = get_processor(ctx)
    document = _resolve(processor, doc_id)

    result = processor.delete(document.id)
    if not result.success:
        _report_failure(result)

    console.print(f"[green]✓[/green] Deleted {result.name}")


@click.command(name="report")
@click.argument("doc_id")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the PDF report (overrides config)",
)
@click.pass_context
def report_command(ctx, doc_id: str, output_dir: Optional[Path]):
    """Export a printable PDF analysis report."""
    processor = get_processor(ctx)
    document = _resolve(processor, doc_id)
    report_settings = processor.config.report

    try:
        renderer = ReportRenderer(max_text_chars=report_settings.max_text_chars)
        path = renderer.write(document, output_dir or report_settings.output_dir)
    except Exception as e:
        logger.exception("Report generation error")
        _fail(f"PDF generation failed: {e}")

    console.print(f"[green]✓[/green] Saved report as [bold]{path}[/bold]")


@click.command(name="stats")
@click.pass_context
def stats_command(ctx):
    """Show statistics for the document collection."""
    stats = compute_collection_stats(get_processor(ctx).list_documents())

    if stats.total_documents == 0:
        console.print("[yellow]No documents uploaded yet.[/yellow]")
        return

    table = Table(title="Collection Statistics", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Documents", str(stats.total_documents))
    table.add_row("Total Words", f"{stats.total_words:,}")
    table.add_row("Total Pages", str(stats.total_pages))
    table.add_row("Avg Reading", f"{stats.average_reading_time}m")
    table.add_row("", "")
    for doc_type, count in sorted(stats.type_distribution.items()):
        table.add_row(f"Type: {doc_type}", str(count))
    for sentiment, count in sorted(stats.sentiment_distribution.items()):
        table.add_row(f"Sentiment: {sentiment}", str(count))

    console.print(table)

    if stats.popular_tags:
        tags = ", ".join(f"{tag} ({count})" for tag, count in stats.popular_tags)
        console.print(f"\n[bold]Popular Tags:[/bold] {tags}")
