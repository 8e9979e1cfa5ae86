"""Post command implementation."""

import asyncio
from typing import Optional

import typer
from rich.console import Console

from ..config import ContentType, load_settings
from ..errors import ConfigError
from ..logging_utils import setup_logging
from ..pipeline import build_orchestrator

console = Console()


def post_command(
    url: str = typer.Argument(..., help="Article URL"),
    announcement: bool = typer.Option(
        False,
        "--announcement",
        help="Use the announcement prompts instead of the technical ones",
    ),
    channel: Optional[str] = typer.Option(
        None,
        "--channel",
        "-c",
        help="Channel ID to post to (default: primary channel; other channels skip dedup)",
    ),
) -> None:
    """Summarize one article and post it to Slack."""
    try:
        settings = load_settings()
    except ConfigError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        raise typer.Exit(1)

    setup_logging(settings.log_level)
    content_type = ContentType.ANNOUNCEMENT if announcement else ContentType.TECHNICAL

    async def on_published() -> None:
        console.print("[dim]Root post is up, finishing enrichment...[/dim]")

    try:
        orchestrator = build_orchestrator(settings)
    except ConfigError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        raise typer.Exit(1)

    result = asyncio.run(
        orchestrator.process_manual_url(
            url, content_type, channel_id=channel, on_published=on_published
        )
    )

    if not result.success:
        console.print(f"[red]❌ {result.message}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✅ {result.message}[/green]")
