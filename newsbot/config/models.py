"""Configuration models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ContentType(str, Enum):
    """Which prompt family applies to a source's articles."""

    TECHNICAL = "technical"
    ANNOUNCEMENT = "announcement"


class SourceConfig(BaseModel):
    """A blog to monitor."""

    name: str = Field(..., description="Source name, also the alert key")
    index_url: str = Field(..., description="Listing page with article links")
    article_selector: str = Field(..., description="CSS selector for article links")
    base_url: str = Field(..., description="Base for resolving relative links")
    content_type: ContentType = Field(ContentType.TECHNICAL, description="Prompt family")
    rss_url: Optional[str] = Field(None, description="Feed URL, preferred over the index page")
    enabled: bool = Field(True, description="Whether source is enabled")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank names."""
        if not v.strip():
            raise ValueError("Source name must not be empty")
        return v


class Settings(BaseModel):
    """Runtime settings, built from the environment at startup."""

    openai_api_key: str = Field(..., description="OpenAI API key")
    openai_base_url: Optional[str] = Field(None, description="Override for the OpenAI endpoint")
    summary_model: str = Field("gpt-5.1-chat-latest", description="Summarizer model")
    research_model: str = Field("gpt-4o", description="Research model")
    script_model: str = Field("gpt-4.1", description="Cartoon script model")
    image_model: str = Field("gpt-image-1", description="Image model")
    research_enabled: bool = Field(True, description="Run research enrichment")
    image_gen_mode: str = Field("off", description="Image enrichment mode (off, cartoon)")

    slack_bot_token: str = Field(..., description="Slack bot token")
    slack_channel_id: str = Field(..., description="Primary channel, subject to dedup")
    slack_signing_secret: Optional[str] = Field(None, description="Slash command signing secret")
    webhook_secret: Optional[str] = Field(None, description="Bearer token for /cron")

    state_file_path: str = Field("./seen_articles.json", description="Persisted state file")
    sources_file: Optional[str] = Field(None, description="YAML file overriding built-in sources")
    article_delay_seconds: float = Field(5.0, ge=0.0, description="Pause between articles")
    fetch_timeout_seconds: float = Field(30.0, gt=0.0, description="HTTP fetch timeout")
    port: int = Field(3000, ge=1, le=65535, description="HTTP server port")
    log_level: str = Field("INFO", description="Logging level")

    @field_validator("image_gen_mode")
    @classmethod
    def validate_image_gen_mode(cls, v: str) -> str:
        """Only known modes are accepted."""
        v = v.strip().lower()
        if v not in ("off", "cartoon"):
            raise ValueError(f"IMAGE_GEN_MODE must be 'off' or 'cartoon', got '{v}'")
        return v
