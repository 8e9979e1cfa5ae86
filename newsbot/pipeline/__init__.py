"""Batch and single-URL pipelines."""

from .dry_run import DryRunPublisher, DryRunStateStore
from .models import ManualResult, RunResult
from .orchestrator import (
    MANUAL_SOURCE,
    RESEARCH_SKIPPED,
    SEED_TITLE,
    PipelineOrchestrator,
    alert_text,
    build_orchestrator,
    display_source,
    scraper_error_text,
)

__all__ = [
    "DryRunPublisher",
    "DryRunStateStore",
    "MANUAL_SOURCE",
    "ManualResult",
    "PipelineOrchestrator",
    "RESEARCH_SKIPPED",
    "RunResult",
    "SEED_TITLE",
    "alert_text",
    "build_orchestrator",
    "display_source",
    "scraper_error_text",
]
