"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .post import post_command
from .run import run_command
from .serve import serve_command
from .sources import sources_app

app = typer.Typer(
    name="newsbot",
    help="AI News Bot - watches AI lab blogs and posts summaries to Slack",
    no_args_is_help=True,
)

app.command("run")(run_command)
app.command("post")(post_command)
app.command("serve")(serve_command)
app.add_typer(sources_app, name="sources", help="Inspect monitored sources")


if __name__ == "__main__":
    app()
