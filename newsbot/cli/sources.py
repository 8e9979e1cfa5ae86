"""Source inspection commands."""

import asyncio
import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..config import SourceConfig, create_default_sources, load_sources, save_sources
from ..errors import FetchError
from ..ingestion import FeedFetcher

console = Console()
sources_app = typer.Typer(help="Inspect and customize monitored sources")


def _registry() -> List[SourceConfig]:
    """Sources from SOURCES_FILE, or the built-in list."""
    load_dotenv()
    sources_file = os.environ.get("SOURCES_FILE", "").strip()
    if not sources_file:
        return create_default_sources()

    try:
        return load_sources(Path(sources_file))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@sources_app.command("list")
def sources_list() -> None:
    """List all configured sources."""
    sources = _registry()
    if not sources:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Enabled", style="yellow")
    table.add_column("Feed", style="green")
    table.add_column("URL", style="blue")

    for source in sources:
        table.add_row(
            source.name,
            source.content_type.value,
            "✓" if source.enabled else "✗",
            "✓" if source.rss_url else "",
            source.rss_url or source.index_url,
        )

    console.print(table)


@sources_app.command("init")
def sources_init(
    path: Path = typer.Argument(Path("sources.yaml"), help="Where to write the sources file"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write the built-in sources to a YAML file for editing.

    Point SOURCES_FILE at the result to use it.
    """
    if path.exists() and not force:
        console.print(f"[red]{path} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(1)

    sources = create_default_sources()
    save_sources(sources, path)
    console.print(f"✅ Created sources: {path} (seeded with {len(sources)} sources)")
    console.print(f"[dim]   set SOURCES_FILE={path} to use it[/dim]")


@sources_app.command("test")
def sources_test(
    name: Optional[str] = typer.Argument(None, help="Source name to test (or test all)"),
) -> None:
    """Check that each source still yields candidate articles."""
    sources = _registry()

    if name:
        sources = [s for s in sources if s.name == name]
        if not sources:
            console.print(f"[red]Source '{name}' not found.[/red]")
            raise typer.Exit(1)

    fetcher = FeedFetcher()
    for source in sources:
        if not source.enabled:
            console.print(f"[yellow]⚠️  {source.name}: Disabled[/yellow]")
            continue

        try:
            urls = asyncio.run(fetcher.list_candidates(source))
        except FetchError as e:
            console.print(f"[red]❌ {source.name}: Failed - {e}[/red]")
            continue
        except Exception as e:
            console.print(f"[red]❌ {source.name}: Error - {e}[/red]")
            continue

        if urls:
            console.print(f"[green]✅ {source.name}: {len(urls)} articles[/green]")
            console.print(f"[dim]   latest: {urls[0]}[/dim]")
        else:
            console.print(f"[red]❌ {source.name}: 0 articles, selector may be broken[/red]")
