"""LLM provider interface and implementations."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    async def chat(self, prompt: str, model: str) -> str:
        """
        Run a single-turn chat completion.

        Args:
            prompt: User message
            model: Model name

        Returns:
            The assistant's reply text (may be empty)
        """

    @abstractmethod
    async def respond(
        self,
        prompt: str,
        model: str,
        instructions: Optional[str] = None,
        web_search: bool = False,
    ) -> str:
        """
        Run a Responses API call, optionally with the web search tool.

        Args:
            prompt: Input text
            model: Model name
            instructions: Optional system instructions
            web_search: Whether the model may search the web

        Returns:
            Concatenated output text (may be empty)
        """

    @abstractmethod
    async def generate_image(self, prompt: str, model: str, size: str = "1024x1024") -> Optional[str]:
        """
        Generate one image.

        Returns:
            Base64-encoded image data, or None if the API returned none
        """

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""


class OpenAIProvider(LLMProvider):
    """OpenAI implementation of LLM provider."""

    def __init__(self, api_key: str, base_url: Optional[str] = None) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            base_url: Custom base URL
        """
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        self.total_tokens = 0
        self.api_calls = 0
        self.images_generated = 0

    async def chat(self, prompt: str, model: str) -> str:
        """Chat completion via OpenAI."""
        self.api_calls += 1
        response = await self.client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
        )

        if response.usage:
            self.total_tokens += response.usage.total_tokens

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()

    async def respond(
        self,
        prompt: str,
        model: str,
        instructions: Optional[str] = None,
        web_search: bool = False,
    ) -> str:
        """Responses API call via OpenAI."""
        kwargs = {"model": model, "input": prompt}
        if instructions:
            kwargs["instructions"] = instructions
        if web_search:
            kwargs["tools"] = [{"type": "web_search"}]

        self.api_calls += 1
        response = await self.client.responses.create(**kwargs)

        if response.usage:
            self.total_tokens += response.usage.total_tokens
            logger.debug("Responses call used %s tokens", response.usage.total_tokens)

        return (response.output_text or "").strip()

    async def generate_image(self, prompt: str, model: str, size: str = "1024x1024") -> Optional[str]:
        """Image generation via OpenAI."""
        self.api_calls += 1
        result = await self.client.images.generate(model=model, prompt=prompt, size=size, n=1)

        if not result.data or not result.data[0].b64_json:
            return None

        self.images_generated += 1
        return result.data[0].b64_json

    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""
        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "images_generated": self.images_generated,
        }


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for dry runs and tests."""

    def __init__(
        self,
        chat_reply: Optional[str] = None,
        respond_reply: Optional[str] = None,
        image: Optional[str] = None,
    ) -> None:
        """Initialize mock provider with optional canned replies."""
        self.chat_reply = chat_reply
        self.respond_reply = respond_reply
        self.image = image
        self.calls: List[Tuple[str, str]] = []

    async def chat(self, prompt: str, model: str) -> str:
        """Mock chat completion."""
        self.calls.append(("chat", model))
        if self.chat_reply is not None:
            return self.chat_reply
        return (
            "Mock haiku line one\n"
            "Mock haiku line two here\n"
            "Mock haiku ends\n"
            "\n"
            "A mock one-liner about the article.\n"
            "---\n"
            "A mock explanation for a smart friend."
        )

    async def respond(
        self,
        prompt: str,
        model: str,
        instructions: Optional[str] = None,
        web_search: bool = False,
    ) -> str:
        """Mock Responses API call."""
        self.calls.append(("respond", model))
        if self.respond_reply is not None:
            return self.respond_reply
        return "🔍 Mock research finding.\n\nBottom line: mock verdict."

    async def generate_image(self, prompt: str, model: str, size: str = "1024x1024") -> Optional[str]:
        """Mock image generation."""
        self.calls.append(("image", model))
        return self.image

    def get_usage_stats(self) -> Dict:
        """Get mock usage statistics."""
        return {
            "total_tokens": len(self.calls) * 100,
            "api_calls": len(self.calls),
            "images_generated": sum(1 for kind, _ in self.calls if kind == "image"),
        }
