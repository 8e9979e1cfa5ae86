"""Persisted state models."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from ..config import ContentType


class SeenArticle(BaseModel):
    """Proof that an article was posted to the primary channel."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)

    url: str = Field(..., description="Article URL as discovered")
    title: str = Field(..., description="Article title, or a placeholder for seeded records")
    source: str = Field(..., description="Source name")
    content_type: ContentType = Field(..., alias="contentType", description="Prompt family")
    posted_at: str = Field(..., alias="postedAt", description="ISO-8601 post time")


class State(BaseModel):
    """Seen articles keyed by article id, plus the per-source alert latch."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    seen: Dict[str, SeenArticle] = Field(default_factory=dict)
    alerted_sources: Dict[str, str] = Field(default_factory=dict, alias="alertedSources")

    @property
    def seen_count(self) -> int:
        """Number of seen articles."""
        return len(self.seen)
