"""Seen-article bookkeeping.

All update functions are copy-on-write: they return a new ``State`` and
leave their input untouched, so callers can compare before and after.
"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Optional, Union

import pendulum
from pydantic import ValidationError

from ..config import ContentType
from .models import SeenArticle, State

logger = logging.getLogger(__name__)

ARTICLE_ID_LENGTH = 16


def article_id(url: str) -> str:
    """Stable dedup key for a URL; no canonicalization is applied."""
    return hashlib.sha256(url.encode("utf-8")).hexdigest()[:ARTICLE_ID_LENGTH]


def _now_iso() -> str:
    return pendulum.now("UTC").to_iso8601_string()


def is_article_seen(state: State, url: str) -> bool:
    """Whether the URL's article id is recorded."""
    return article_id(url) in state.seen


def mark_article_seen(
    state: State,
    url: str,
    title: str,
    source: str,
    content_type: Union[ContentType, str],
    now: Optional[str] = None,
) -> State:
    """Return a copy of ``state`` with the article recorded."""
    record = SeenArticle(
        url=url,
        title=title,
        source=source,
        content_type=ContentType(content_type),
        posted_at=now or _now_iso(),
    )
    seen = dict(state.seen)
    seen[article_id(url)] = record
    return state.model_copy(update={"seen": seen})


def is_source_alerted(state: State, source_name: str) -> bool:
    """Whether a breakage alert is currently latched for the source."""
    return bool(state.alerted_sources.get(source_name))


def mark_source_alerted(state: State, source_name: str, now: Optional[str] = None) -> State:
    """Return a copy of ``state`` with the source's alert latched."""
    alerted = dict(state.alerted_sources)
    alerted[source_name] = now or _now_iso()
    return state.model_copy(update={"alerted_sources": alerted})


def clear_source_alert(state: State, source_name: str) -> State:
    """Return a copy of ``state`` without the source's alert."""
    if source_name not in state.alerted_sources:
        return state
    alerted = {name: ts for name, ts in state.alerted_sources.items() if name != source_name}
    return state.model_copy(update={"alerted_sources": alerted})


class StateStore:
    """Load and save the state document as a single JSON file.

    Assumes a single writer; overlapping runs are not coordinated here.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """Initialize store for the given file."""
        self.path = Path(path)

    def load(self) -> State:
        """Read the state file; missing or corrupt files yield an empty state."""
        if not self.path.exists():
            return State()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return State.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Failed to parse state file %s, starting fresh: %s", self.path, e)
            return State()

    def save(self, state: State) -> None:
        """Overwrite the state file with the full document."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = state.model_dump(mode="json", by_alias=True)
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
