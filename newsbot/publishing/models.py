"""Data models for publishing."""

from pydantic import BaseModel, Field

from ..config import ContentType


class ArticlePost(BaseModel):
    """What the root message says about an article."""

    title: str = Field(..., description="Article title")
    url: str = Field(..., description="Article URL")
    source: str = Field(..., description="Display name of the source")
    content_type: ContentType = Field(..., description="Prompt family, selects the emoji")
