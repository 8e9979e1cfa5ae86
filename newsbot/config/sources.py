"""Built-in source registry."""

from typing import List

from .models import ContentType, SourceConfig

# OpenAI's news hub links every post under /index/; the listing pages themselves are excluded.
_OPENAI_SELECTOR = 'a[href^="/index/"]:not([href="/index/"]):not([href*="/research/index"])'


def create_default_sources() -> List[SourceConfig]:
    """Create the default AI lab sources."""
    return [
        SourceConfig(
            name="Anthropic Engineering",
            index_url="https://www.anthropic.com/engineering",
            article_selector='a[href*="/engineering/"]',
            base_url="https://www.anthropic.com",
            content_type=ContentType.TECHNICAL,
        ),
        SourceConfig(
            name="OpenAI Engineering",
            index_url="https://openai.com/news/engineering/",
            article_selector=_OPENAI_SELECTOR,
            base_url="https://openai.com",
            content_type=ContentType.TECHNICAL,
        ),
        SourceConfig(
            name="OpenAI Research",
            index_url="https://openai.com/news/research/",
            article_selector=_OPENAI_SELECTOR,
            base_url="https://openai.com",
            content_type=ContentType.TECHNICAL,
        ),
        SourceConfig(
            name="Google DeepMind",
            index_url="https://deepmind.google/discover/blog/",
            article_selector='a[href^="/blog/"]',
            base_url="https://deepmind.google",
            content_type=ContentType.TECHNICAL,
        ),
        SourceConfig(
            name="Cursor Blog",
            index_url="https://www.cursor.com/blog",
            article_selector='a[href^="/blog/"]:not([href="/blog/"]):not([href*="/blog/topic/"])',
            base_url="https://www.cursor.com",
            content_type=ContentType.TECHNICAL,
        ),
        SourceConfig(
            name="Simon Willison",
            index_url="https://simonwillison.net/tags/ai/",
            article_selector="h3 a, h4 a",
            base_url="https://simonwillison.net",
            content_type=ContentType.TECHNICAL,
            rss_url="https://simonwillison.net/tags/ai.atom",
        ),
        SourceConfig(
            name="Thinking Machines",
            index_url="https://thinkingmachines.ai/blog/",
            article_selector='a[href*="/blog/"]',
            base_url="https://thinkingmachines.ai",
            content_type=ContentType.TECHNICAL,
        ),
        SourceConfig(
            name="Reflection AI",
            index_url="https://reflection.ai/blog/",
            article_selector='a[href^="/blog/"]:not([href="/blog/"])',
            base_url="https://reflection.ai",
            content_type=ContentType.TECHNICAL,
        ),
        SourceConfig(
            name="Anthropic News",
            index_url="https://www.anthropic.com/news",
            article_selector='a[href*="/news/"]',
            base_url="https://www.anthropic.com",
            content_type=ContentType.ANNOUNCEMENT,
        ),
        SourceConfig(
            name="OpenAI Product",
            index_url="https://openai.com/news/product-releases/",
            article_selector=_OPENAI_SELECTOR,
            base_url="https://openai.com",
            content_type=ContentType.ANNOUNCEMENT,
        ),
    ]
