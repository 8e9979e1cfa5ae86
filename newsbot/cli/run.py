"""Run command implementation."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from ..config import load_settings
from ..errors import ConfigError
from ..logging_utils import setup_logging
from ..pipeline import RunResult, build_orchestrator

console = Console()


def run_command(
    seed: bool = typer.Option(
        False,
        "--seed",
        help="Mark every current article as seen without summarizing or posting",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Use canned LLM output, log Slack calls instead of sending, don't save state",
    ),
) -> None:
    """Check every source once and post new articles."""
    try:
        settings = load_settings()
    except ConfigError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        raise typer.Exit(1)

    setup_logging(settings.log_level)

    try:
        orchestrator = build_orchestrator(settings, dry_run=dry_run)
        result = asyncio.run(orchestrator.run_scrape_check(seed_mode=seed))
    except ConfigError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Run interrupted by user[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]❌ Fatal error: {e}[/red]")
        raise typer.Exit(1)

    _print_summary(result, len(orchestrator.sources), dry_run)


def _print_summary(result: RunResult, source_count: int, dry_run: bool) -> None:
    table = Table(title="Seed Summary" if result.seed_mode else "Run Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold")

    table.add_row("Sources", str(source_count))
    table.add_row("Seeded" if result.seed_mode else "Posted", str(result.processed))
    failed_style = "red" if result.failed else "green"
    table.add_row("Failed sources", f"[{failed_style}]{result.failed}[/{failed_style}]")
    if not result.seed_mode:
        table.add_row("LLM calls", str(result.llm_calls))
        table.add_row("Tokens", f"{result.tokens_used:,}")
        if result.images_generated:
            table.add_row("Images", str(result.images_generated))
    if dry_run:
        table.add_row("Mode", "[yellow]dry run[/yellow]")

    console.print(table)
