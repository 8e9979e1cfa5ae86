"""Data models for generation."""

from typing import List, Optional

from pydantic import BaseModel, Field


class SummaryOutputs(BaseModel):
    """Summarizer result split at the separator."""

    main_summary: str = Field(..., description="Haiku plus one-liner")
    secondary_analysis: str = Field("", description="ELI5 explanation")


class CartoonScript(BaseModel):
    """Four-panel cartoon script."""

    style: str = Field(..., description="Drawing style")
    character: str = Field(..., description="Recurring character description")
    panels: List[str] = Field(..., description="Panel descriptions, in order")
    raw: str = Field(..., description="Unparsed script text")


class CartoonResult(BaseModel):
    """Outcome of the cartoon pipeline."""

    image_b64: Optional[str] = Field(None, description="Base64-encoded PNG")
    error: Optional[str] = Field(None, description="Why no image was produced")
    prompt: Optional[str] = Field(None, description="Image prompt, when one was built")

    @property
    def ok(self) -> bool:
        """Whether an image was produced."""
        return self.image_b64 is not None
