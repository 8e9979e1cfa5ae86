"""Serve command implementation."""

from typing import Optional

import typer
from rich.console import Console

from ..config import load_settings
from ..errors import ConfigError
from ..logging_utils import setup_logging
from ..server import create_app

console = Console()


def serve_command(
    host: str = typer.Option("0.0.0.0", "--host", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default: PORT or 3000)"),
) -> None:
    """Run the HTTP server for cron triggers and Slack slash commands."""
    try:
        settings = load_settings()
    except ConfigError as e:
        console.print(f"[red]❌ Configuration error: {e}[/red]")
        raise typer.Exit(1)

    setup_logging(settings.log_level)
    port = port or settings.port

    console.print(f"🚀 AI News Bot server running on port {port}")
    console.print("   POST /slack - Slack slash command")
    console.print("   GET  /cron  - Trigger scheduled scrape")
    console.print("   GET  /      - Health check")

    app = create_app(settings)
    app.run(host=host, port=port)
