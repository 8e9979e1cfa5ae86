"""Seen-article and source-alert state."""

from .models import SeenArticle, State
from .store import (
    StateStore,
    article_id,
    clear_source_alert,
    is_article_seen,
    is_source_alerted,
    mark_article_seen,
    mark_source_alerted,
)

__all__ = [
    "SeenArticle",
    "State",
    "StateStore",
    "article_id",
    "clear_source_alert",
    "is_article_seen",
    "is_source_alerted",
    "mark_article_seen",
    "mark_source_alerted",
]
