"""Candidate article discovery from feeds and index pages."""

import logging
from typing import List, Optional
from urllib.parse import urlparse

import feedparser
import httpx
from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from ..config import SourceConfig
from ..errors import FetchError
from .page import DEFAULT_TIMEOUT, fetch_page

logger = logging.getLogger(__name__)


class FeedFetcher:
    """List candidate article URLs for a source."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize feed fetcher."""
        self.timeout = timeout
        self.transport = transport

    async def list_candidates(self, source: SourceConfig) -> List[str]:
        """Return candidate article URLs in discovery order.

        Uses the source's feed when it has one, otherwise scrapes the
        index page with the source's link selector.

        Raises:
            FetchError: when the feed or index page cannot be fetched, or the
                link selector is malformed
        """
        if source.rss_url:
            logger.info("Fetching feed: %s", source.rss_url)
            return await self.fetch_feed(source.rss_url)

        logger.info("Fetching index: %s", source.index_url)
        html = await fetch_page(source.index_url, self.timeout, self.transport)
        try:
            return extract_article_urls(html, source.article_selector, source.base_url)
        except (SelectorSyntaxError, ValueError) as e:
            raise FetchError(source.index_url, f"Invalid selector '{source.article_selector}': {e}")

    async def fetch_feed(self, feed_url: str) -> List[str]:
        """Fetch an RSS/Atom feed and return each entry's link."""
        body = await fetch_page(feed_url, self.timeout, self.transport)
        feed = feedparser.parse(body)

        if feed.bozo and not feed.entries:
            logger.warning("Unparseable feed %s: %s", feed_url, feed.get("bozo_exception"))
            return []

        urls: List[str] = []
        for entry in feed.entries:
            link = _entry_link(entry)
            if link and link not in urls:
                urls.append(link)
        return urls


def _entry_link(entry) -> Optional[str]:
    """Prefer the alternate link relation, fall back to the plain link."""
    for link in entry.get("links", []):
        if link.get("rel") == "alternate" and link.get("href"):
            return link["href"]
    return entry.get("link")


def extract_article_urls(html: str, selector: str, base_url: str) -> List[str]:
    """Select article links from an index page.

    Relative links are resolved against ``base_url``. Links whose path has
    fewer than two segments are treated as listing pages and dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    urls: List[str] = []

    for element in soup.select(selector):
        href = element.get("href")
        if not href:
            continue

        full_url = resolve_url(href.strip(), base_url)
        try:
            path = urlparse(full_url).path
        except ValueError:
            continue

        segments = [segment for segment in path.split("/") if segment]
        if len(segments) >= 2 and full_url not in urls:
            urls.append(full_url)

    return urls


def resolve_url(href: str, base_url: str) -> str:
    """Resolve an index-page link against the source's base URL."""
    if href.startswith("http"):
        return href
    base = base_url.rstrip("/")
    if href.startswith("/"):
        return f"{base}{href}"
    return f"{base}/{href}"
