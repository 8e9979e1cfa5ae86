"""Configuration loader."""

import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigError
from .models import Settings, SourceConfig
from .sources import create_default_sources

logger = logging.getLogger(__name__)

REQUIRED_ENV = {
    "openai_api_key": "OPENAI_API_KEY",
    "slack_bot_token": "SLACK_BOT_TOKEN",
    "slack_channel_id": "SLACK_CHANNEL_ID",
}

OPTIONAL_ENV = {
    "openai_base_url": "OPENAI_BASE_URL",
    "summary_model": "SUMMARY_MODEL",
    "research_model": "RESEARCH_MODEL",
    "script_model": "SCRIPT_MODEL",
    "image_model": "IMAGE_MODEL",
    "research_enabled": "RESEARCH_ENABLED",
    "image_gen_mode": "IMAGE_GEN_MODE",
    "slack_signing_secret": "SLACK_SIGNING_SECRET",
    "webhook_secret": "WEBHOOK_SECRET",
    "state_file_path": "STATE_FILE_PATH",
    "sources_file": "SOURCES_FILE",
    "article_delay_seconds": "ARTICLE_DELAY_SECONDS",
    "fetch_timeout_seconds": "FETCH_TIMEOUT_SECONDS",
    "port": "PORT",
    "log_level": "LOG_LEVEL",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from environment variables.

    When no mapping is given, a local .env file is loaded first and the
    process environment is used.

    Raises:
        ConfigError: naming the first missing or invalid variable
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    data: Dict[str, object] = {}
    for field_name, env_name in REQUIRED_ENV.items():
        value = environ.get(env_name, "").strip()
        if not value:
            raise ConfigError(f"Missing required environment variable: {env_name}")
        data[field_name] = value

    for field_name, env_name in OPTIONAL_ENV.items():
        value = environ.get(env_name, "").strip()
        if not value:
            continue
        if field_name == "research_enabled":
            data[field_name] = _parse_bool(env_name, value)
        else:
            data[field_name] = value

    try:
        return Settings(**data)
    except ValidationError as e:
        error = e.errors()[0]
        field_name = str(error["loc"][0]) if error["loc"] else ""
        env_name = OPTIONAL_ENV.get(field_name) or REQUIRED_ENV.get(field_name, field_name)
        raise ConfigError(f"Invalid value for {env_name}: {error['msg']}")


def _parse_bool(env_name: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"Invalid value for {env_name}: expected a boolean, got '{value}'")


def resolve_sources(settings: Settings) -> List[SourceConfig]:
    """Sources from SOURCES_FILE when set, else the built-in registry.

    Raises:
        ConfigError: when SOURCES_FILE is missing or not valid YAML
    """
    if not settings.sources_file:
        return create_default_sources()

    try:
        return load_sources(Path(settings.sources_file))
    except (FileNotFoundError, ValueError) as e:
        raise ConfigError(f"Invalid value for SOURCES_FILE: {e}")


def load_sources(sources_path: Path) -> List[SourceConfig]:
    """Load sources from YAML file."""
    if not sources_path.exists():
        raise FileNotFoundError(f"Sources file not found: {sources_path}")

    try:
        with open(sources_path, encoding="utf-8") as f:
            sources_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in sources file: {e}")

    if sources_data is None or "sources" not in sources_data:
        return []

    sources = []
    for source_data in sources_data["sources"]:
        try:
            sources.append(SourceConfig(**source_data))
        except ValidationError as e:
            logger.warning("Skipping invalid source %s: %s", source_data.get("name", "unknown"), e)

    return sources


def save_sources(sources: List[SourceConfig], sources_path: Path) -> None:
    """Save sources to YAML file."""
    sources_path.parent.mkdir(parents=True, exist_ok=True)

    sources_data = {"sources": [s.model_dump(mode="json") for s in sources]}

    with open(sources_path, "w", encoding="utf-8") as f:
        yaml.dump(sources_data, f, default_flow_style=False, sort_keys=False)
