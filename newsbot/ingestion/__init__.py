"""Candidate discovery and article fetching."""

from .article_fetcher import ArticleFetcher, extract_article
from .feed_fetcher import FeedFetcher, extract_article_urls, resolve_url
from .models import ArticleContent
from .page import USER_AGENT, fetch_page

__all__ = [
    "ArticleContent",
    "ArticleFetcher",
    "FeedFetcher",
    "USER_AGENT",
    "extract_article",
    "extract_article_urls",
    "fetch_page",
    "resolve_url",
]
