"""Main CLI interface for DocAnalyzer using Click."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from .. import __version__
from ..config import get_config_manager
from ..database import get_database, initialize_migrations
from ..utils.logging import get_logger, setup_logging
from .documents import (
    delete_command,
    list_command,
    reprocess_command,
    report_command,
    show_command,
    stats_command,
    upload_command,
)

console = Console()
logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="DocAnalyzer")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx, config: Optional[Path]):
    """
    DocAnalyzer - extract, classify and summarize documents.

    Upload PDF, Word, text or zip files, get an AI analysis of each one and
    export printable reports.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


@cli.command()
@click.option(
    "--db-path",
    type=click.Path(path_type=Path),
    help="Custom database path (overrides config)",
)
@click.pass_context
def init(ctx, db_path: Optional[Path]):
    """
    Initialize the DocAnalyzer database and default configuration.

    Creates the document store and writes a default configuration file if
    none exists.
    """
    console.print("\n[bold cyan]DocAnalyzer Initialization[/bold cyan]\n")

    try:
        config_manager = get_config_manager(ctx.obj.get("config_path"))
        config = config_manager.load(create_if_missing=True)

        if config_manager.config_path is None:
            default_config_path = Path("config/docanalyzer.yaml")
            config_manager.save(config, default_config_path)
            console.print(f"✓ Created default configuration: [green]{default_config_path}[/green]")
        else:
            console.print(
                f"✓ Loaded configuration from: [green]{config_manager.config_path}[/green]"
            )

        setup_logging(
            level=config.logging.level,
            log_dir=config.logging.log_dir,
            max_bytes=config.logging.max_bytes,
            backup_count=config.logging.backup_count,
            console_enabled=config.logging.console_enabled,
            file_enabled=config.logging.file_enabled,
        )

        final_db_path = db_path or config.storage.path
        console.print(f"\n[cyan]Initializing database:[/cyan] {final_db_path}")

        db = get_database(final_db_path)
        applied = initialize_migrations(db).apply_migrations()
        console.print(f"✓ Created document store ({applied} migration(s) applied)")

        config.report.output_dir.mkdir(parents=True, exist_ok=True)
        console.print("✓ Created report directory")

        console.print("\n[bold green]✓ Initialization complete![/bold green]")
        console.print("\n[cyan]Next steps:[/cyan]")
        console.print("  1. Set the [yellow]GROQ_API_KEY[/yellow] environment variable")
        console.print("  2. Upload a document: [yellow]docanalyzer upload report.pdf[/yellow]")

    except Exception as e:
        console.print(f"\n[bold red]✗ Initialization failed:[/bold red] {e}")
        logger.exception("Initialization error")
        sys.exit(1)


@cli.group(name="config")
def config_group():
    """Manage DocAnalyzer configuration."""
    pass


@config_group.command(name="show")
@click.pass_context
def config_show(ctx):
    """Display current configuration."""
    console.print("\n[bold cyan]DocAnalyzer Configuration[/bold cyan]\n")

    try:
        config_manager = get_config_manager(ctx.obj.get("config_path"))
        config = config_manager.load(create_if_missing=True)

        console.print("[bold]Analysis Service:[/bold]")
        console.print(f"  URL: {config.analysis.base_url}")
        console.print(f"  Model: {config.analysis.model}")
        console.print(f"  Temperature: {config.analysis.temperature}")
        console.print(f"  Max Tokens: {config.analysis.max_tokens}")
        console.print(f"  Input Limit: {config.analysis.max_input_chars} chars")
        console.print(
            f"  API Key: {'[green]set[/green]' if config.analysis.api_key else '[yellow]not set[/yellow]'}"
        )

        console.print("\n[bold]Processing:[/bold]")
        console.print(f"  Max File Size: {config.processing.max_file_size_mb:g}MB")
        console.print(
            f"  Size Limit: {'[green]Enforced[/green]' if config.processing.enforce_size_limit else '[yellow]Advisory[/yellow]'}"
        )

        console.print("\n[bold]Reports:[/bold]")
        console.print(f"  Output Directory: {config.report.output_dir}")
        console.print(f"  Text Budget: {config.report.max_text_chars} chars")

        console.print("\n[bold]Storage:[/bold]")
        console.print(f"  Database: {config.storage.path}")
        console.print(f"  Collection Key: {config.storage.collection_key}")

        console.print(f"\n[dim]Config file: {config_manager.config_path or '(defaults)'}[/dim]")

    except Exception as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        logger.exception("Config show error")
        sys.exit(1)


cli.add_command(upload_command)
cli.add_command(list_command)
cli.add_command(show_command)
cli.add_command(reprocess_command)
cli.add_command(delete_command)
cli.add_command(report_command)
cli.add_command(stats_command)


if __name__ == "__main__":
    cli()
