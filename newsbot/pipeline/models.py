"""Pipeline result models."""

from pydantic import BaseModel, Field


class RunResult(BaseModel):
    """Outcome of one batch run."""

    processed: int = Field(0, description="New seen records added by the run")
    failed: int = Field(0, description="Sources that failed outright")
    seed_mode: bool = Field(False, description="Whether the run only seeded state")
    llm_calls: int = Field(0, description="LLM API calls made during the run")
    tokens_used: int = Field(0, description="Tokens reported by the LLM provider during the run")
    images_generated: int = Field(0, description="Images generated during the run")


class ManualResult(BaseModel):
    """Outcome of a single-URL request, shown to whoever asked for it."""

    success: bool
    message: str
