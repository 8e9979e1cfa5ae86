"""Slack publishing."""

from .formatting import (
    SLACK_BLOCK_LIMIT,
    format_main_post,
    section_blocks,
    split_headline,
    to_slack_markdown,
    truncate_for_slack,
)
from .models import ArticlePost
from .progress import DEFAULT_FRAMES, ProgressAnimation
from .slack import ELI5_LABEL, IMAGE_CAPTION, SCOOP_LABEL, SlackPublisher

__all__ = [
    "ArticlePost",
    "DEFAULT_FRAMES",
    "ELI5_LABEL",
    "IMAGE_CAPTION",
    "ProgressAnimation",
    "SCOOP_LABEL",
    "SLACK_BLOCK_LIMIT",
    "SlackPublisher",
    "format_main_post",
    "section_blocks",
    "split_headline",
    "to_slack_markdown",
    "truncate_for_slack",
]
