"""Data models for ingestion."""

from pydantic import BaseModel, Field


class ArticleContent(BaseModel):
    """Extracted article content."""

    url: str = Field(..., description="Article URL")
    title: str = Field(..., description="Article title")
    text: str = Field(..., description="Extracted main text")
