"""Article fetcher and text extractor."""

import logging
from typing import Optional, Tuple

import httpx
import trafilatura
from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable
from trafilatura.metadata import extract_metadata

from ..errors import ExtractionError
from .models import ArticleContent
from .page import DEFAULT_TIMEOUT, fetch_page

logger = logging.getLogger(__name__)


class ArticleFetcher:
    """Fetch HTML and extract the readable article."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize article fetcher."""
        self.timeout = timeout
        self.transport = transport

    async def fetch_article(self, url: str) -> ArticleContent:
        """Fetch and extract a single article.

        Raises:
            FetchError: when the page cannot be fetched
            ExtractionError: when no readable content is found
        """
        html = await fetch_page(url, self.timeout, self.transport)
        return extract_article(url, html)


def extract_article(url: str, html: str) -> ArticleContent:
    """Run readability over a page, falling back to trafilatura for the text."""
    title, text = _extract_readability(html)

    if not text:
        logger.debug("Readability found no content for %s, trying trafilatura", url)
        text = trafilatura.extract(
            html,
            include_comments=False,
            include_tables=False,
            favor_precision=True,
            url=url,
        )

    if not text:
        raise ExtractionError(url)

    if not title:
        metadata = extract_metadata(html)
        title = metadata.title if metadata and metadata.title else "Untitled"

    text = text.strip()
    return ArticleContent(url=url, title=title, text=text)


def _extract_readability(html: str) -> Tuple[str, str]:
    try:
        doc = Document(html)
        content_html = doc.summary()
        title = doc.short_title() or ""
    except Unparseable:
        return "", ""

    soup = BeautifulSoup(content_html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(separator="\n")
    cleaned = "\n".join(line.strip() for line in text.splitlines() if line.strip())
    return title.strip(), cleaned

