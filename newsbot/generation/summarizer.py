"""Haiku, one-liner and ELI5 generation."""

import logging

from ..config import ContentType
from .llm_provider import LLMProvider
from .models import SummaryOutputs
from .prompts import build_summary_prompt

logger = logging.getLogger(__name__)

SEPARATOR = "---"
MAX_CONTENT_CHARS = 15000


def split_summary(raw: str) -> SummaryOutputs:
    """Split a raw summarizer response at the first separator.

    Without a separator the whole response becomes the main summary and
    the secondary analysis is empty.
    """
    main, found, rest = raw.partition(SEPARATOR)
    main = main.strip()
    secondary = rest.strip() if found else ""
    return SummaryOutputs(main_summary=main or raw.strip(), secondary_analysis=secondary)


class Summarizer:
    """Generate the headline unit and the explanation for an article."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        model: str,
        max_chars: int = MAX_CONTENT_CHARS,
    ) -> None:
        """
        Initialize summarizer.

        Args:
            llm_provider: LLM provider for the completion call
            model: Model name
            max_chars: Article prefix length sent to the model
        """
        self.llm_provider = llm_provider
        self.model = model
        self.max_chars = max_chars

    async def generate_summaries(
        self, content: str, title: str, content_type: ContentType
    ) -> SummaryOutputs:
        """Run one completion and split it into its two parts."""
        logger.info("Generating haiku + take + ELI5...")
        prompt = build_summary_prompt(content, title, content_type, self.max_chars)
        raw = await self.llm_provider.chat(prompt, self.model)

        outputs = split_summary(raw)
        if not outputs.secondary_analysis:
            logger.warning("Summary for '%s' had no separator; ELI5 is empty", title)
        return outputs
