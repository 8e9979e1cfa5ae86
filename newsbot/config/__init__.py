"""Configuration management for the news bot."""

from .loader import load_settings, load_sources, resolve_sources, save_sources
from .models import ContentType, Settings, SourceConfig
from .sources import create_default_sources

__all__ = [
    "ContentType",
    "Settings",
    "SourceConfig",
    "create_default_sources",
    "load_settings",
    "load_sources",
    "resolve_sources",
    "save_sources",
]
