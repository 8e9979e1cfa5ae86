"""Slack mrkdwn formatting helpers."""

import re
from typing import List, Tuple

from ..config import ContentType

SLACK_BLOCK_LIMIT = 2900
TRUNCATED_MARKER = "_(truncated)_"
EMPTY_SECTION = "_Nothing to add._"

_HEADING_RE = re.compile(r"^#{1,3}\s+(.+)$", re.MULTILINE)
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

CONTENT_EMOJI = {
    ContentType.TECHNICAL: "🔬",
    ContentType.ANNOUNCEMENT: "📢",
}


def to_slack_markdown(text: str) -> str:
    """Convert common markdown to Slack mrkdwn."""
    text = _HEADING_RE.sub(r"*\1*", text)
    text = _BOLD_RE.sub(r"*\1*", text)
    return _LINK_RE.sub(r"<\2|\1>", text)


def truncate_for_slack(text: str, max_len: int = SLACK_BLOCK_LIMIT) -> str:
    """Fit text into one Slack block, cutting at a paragraph break when one is close."""
    if len(text) <= max_len:
        return text

    truncated = text[:max_len]
    last_break = truncated.rfind("\n\n")
    if last_break > max_len * 0.7:
        return f"{truncated[:last_break]}\n\n{TRUNCATED_MARKER}"
    return f"{truncated.rstrip()}…\n\n{TRUNCATED_MARKER}"


def split_headline(main_summary: str) -> Tuple[List[str], str]:
    """Split the headline unit into haiku lines and the one-liner."""
    parts = main_summary.strip().split("\n\n")
    haiku_lines = [line.strip() for line in parts[0].split("\n") if line.strip()]
    one_liner = " ".join(part.strip() for part in parts[1:]).strip()
    return haiku_lines, one_liner


def format_main_post(
    source: str, url: str, title: str, main_summary: str, content_type: ContentType
) -> str:
    """Root message: source line, quoted haiku, one-liner linking to the article."""
    emoji = CONTENT_EMOJI[ContentType(content_type)]
    haiku_lines, one_liner = split_headline(main_summary)
    quoted = "\n".join(f"> _{line}_" for line in haiku_lines)
    link_text = (one_liner or title).replace("|", "/").replace(">", "›")
    return f"{emoji} *{source}*\n\n{quoted}\n\n<{url}|{link_text}>"


def section_blocks(label: str, text: str) -> List[dict]:
    """Header plus mrkdwn section for a thread reply."""
    return [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": label, "emoji": True},
        },
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": truncate_for_slack(to_slack_markdown(text)) or EMPTY_SECTION},
        },
    ]
