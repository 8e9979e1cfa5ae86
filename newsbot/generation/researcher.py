"""Best-effort background research for an article."""

import logging

from ..config import ContentType
from .llm_provider import LLMProvider
from .prompts import build_fallback_research_prompt, build_research_prompt

logger = logging.getLogger(__name__)

MAX_EXCERPT_CHARS = 5000
EMPTY_RESEARCH = "Research could not be completed."
EMPTY_FALLBACK = "Research context could not be generated."


def research_unavailable(title: str) -> str:
    """Fixed text used when every research attempt failed."""
    return f'*Research unavailable* - Could not generate context for "{title}".'


class Researcher:
    """Produce a short research report; never raises."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        model: str,
        max_chars: int = MAX_EXCERPT_CHARS,
    ) -> None:
        """Initialize researcher."""
        self.llm_provider = llm_provider
        self.model = model
        self.max_chars = max_chars

    async def run_research(self, content: str, title: str, content_type: ContentType) -> str:
        """Search-grounded research, falling back to the model's own knowledge."""
        prompt = build_research_prompt(content, title, content_type, self.max_chars)
        try:
            result = await self.llm_provider.respond(prompt, self.model, web_search=True)
            return result or EMPTY_RESEARCH
        except Exception as e:
            logger.warning("Web research failed for '%s', falling back: %s", title, e)

        return await self.run_simple_research(content, title, content_type)

    async def run_simple_research(self, content: str, title: str, content_type: ContentType) -> str:
        """Research without web search."""
        prompt = build_fallback_research_prompt(content, title, content_type, self.max_chars)
        try:
            result = await self.llm_provider.chat(prompt, self.model)
            return result or EMPTY_FALLBACK
        except Exception as e:
            logger.error("Simple research failed for '%s': %s", title, e)
            return research_unavailable(title)
