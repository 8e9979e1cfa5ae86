"""HTTP server for cron triggers and Slack slash commands."""

from .app import create_app, parse_command_text, verify_slack_signature

__all__ = ["create_app", "parse_command_text", "verify_slack_signature"]
