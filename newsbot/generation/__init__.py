"""Summaries, research and imagery."""

from .illustrator import CartoonIllustrator, build_image_prompt, extract_haiku, parse_script
from .llm_provider import LLMProvider, MockLLMProvider, OpenAIProvider
from .models import CartoonResult, CartoonScript, SummaryOutputs
from .researcher import Researcher, research_unavailable
from .summarizer import Summarizer, split_summary

__all__ = [
    "CartoonIllustrator",
    "CartoonResult",
    "CartoonScript",
    "LLMProvider",
    "MockLLMProvider",
    "OpenAIProvider",
    "Researcher",
    "Summarizer",
    "SummaryOutputs",
    "build_image_prompt",
    "extract_haiku",
    "parse_script",
    "research_unavailable",
    "split_summary",
]
