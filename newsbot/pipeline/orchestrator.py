"""Pipeline orchestrator: scheduled batch runs and single-URL requests."""

import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import urlparse

from ..config import ContentType, Settings, SourceConfig, resolve_sources
from ..errors import FetchError
from ..generation import (
    CartoonIllustrator,
    LLMProvider,
    MockLLMProvider,
    OpenAIProvider,
    Researcher,
    Summarizer,
    SummaryOutputs,
    extract_haiku,
)
from ..ingestion import ArticleContent, ArticleFetcher, FeedFetcher
from ..publishing import ArticlePost, ProgressAnimation, SlackPublisher
from ..state import (
    State,
    StateStore,
    clear_source_alert,
    is_article_seen,
    is_source_alerted,
    mark_article_seen,
    mark_source_alerted,
)
from .dry_run import DryRunPublisher, DryRunStateStore
from .models import ManualResult, RunResult

logger = logging.getLogger(__name__)

SEED_TITLE = "(seeded)"
MANUAL_SOURCE = "Manual"
RESEARCH_SKIPPED = "_Research skipped: research enrichment is turned off._"

Sleep = Callable[[float], Awaitable[None]]


def alert_text(source: SourceConfig) -> str:
    """Message sent when a source first returns no candidates."""
    return (
        f"⚠️ *Scraper Alert*: {source.name} returned 0 articles. Selector may be broken.\n"
        f"{source.index_url}"
    )


def scraper_error_text(source: SourceConfig, error: BaseException) -> str:
    """Message sent when a source fails outright."""
    return f"🚨 *Scraper Error*: {source.name} failed completely.\n```{error}```"


def display_source(url: str) -> str:
    """Host of a URL without a leading ``www.``."""
    host = urlparse(url).hostname or url
    return host[4:] if host.startswith("www.") else host


class PipelineOrchestrator:
    """Runs sources through fetch, summarize, research and publish.

    Collaborators are passed in so tests and dry runs can swap any of
    them. State is threaded through each run as an immutable value and
    written back once at the end.
    """

    def __init__(
        self,
        settings: Settings,
        sources: List[SourceConfig],
        fetcher: FeedFetcher,
        article_fetcher: ArticleFetcher,
        summarizer: Summarizer,
        researcher: Researcher,
        illustrator: CartoonIllustrator,
        publisher: SlackPublisher,
        store: StateStore,
        sleep: Sleep = asyncio.sleep,
        llm_provider: Optional[LLMProvider] = None,
    ) -> None:
        self.settings = settings
        self.sources = sources
        self.fetcher = fetcher
        self.article_fetcher = article_fetcher
        self.summarizer = summarizer
        self.researcher = researcher
        self.illustrator = illustrator
        self.publisher = publisher
        self.store = store
        self.sleep = sleep
        self.llm_provider = llm_provider

    async def run_scrape_check(self, seed_mode: bool = False) -> RunResult:
        """
        Check every enabled source once.

        Args:
            seed_mode: Mark all candidates seen without summarizing or posting

        Returns:
            Counts of new seen records and failed sources
        """
        if seed_mode:
            logger.info("=== Seed mode: marking current articles as seen (no LLM calls, no posts) ===")
        else:
            logger.info("=== News check starting ===")

        usage_before = self._usage()
        state = self.store.load()
        logger.info("Loaded state: %d articles seen", state.seen_count)

        processed = 0
        failed = 0

        for source in self.sources:
            if not source.enabled:
                logger.debug("Skipping disabled source %s", source.name)
                continue

            try:
                if seed_mode:
                    new_state = await self._seed_source(source, state)
                else:
                    new_state = await self._process_source(source, state)
            except Exception as e:
                logger.exception("Error processing %s", source.name)
                failed += 1
                if not seed_mode:
                    await self.publisher.send_message(scraper_error_text(source, e))
                continue

            processed += new_state.seen_count - state.seen_count
            state = new_state

        self.store.save(state)
        logger.info("Saved state: %d articles seen", state.seen_count)
        logger.info(
            "%s complete: %d %s, %d failed sources",
            "Seed" if seed_mode else "Run",
            processed,
            "seeded" if seed_mode else "new articles",
            failed,
        )
        usage = self._usage()
        llm_calls = usage.get("api_calls", 0) - usage_before.get("api_calls", 0)
        tokens_used = usage.get("total_tokens", 0) - usage_before.get("total_tokens", 0)
        images = usage.get("images_generated", 0) - usage_before.get("images_generated", 0)
        if llm_calls:
            logger.info("LLM usage: %d calls, %d tokens, %d images", llm_calls, tokens_used, images)

        return RunResult(
            processed=processed,
            failed=failed,
            seed_mode=seed_mode,
            llm_calls=llm_calls,
            tokens_used=tokens_used,
            images_generated=images,
        )

    def _usage(self) -> Dict[str, int]:
        if self.llm_provider is None:
            return {}
        return self.llm_provider.get_usage_stats()

    async def _list_candidates(self, source: SourceConfig) -> List[str]:
        try:
            return await self.fetcher.list_candidates(source)
        except FetchError as e:
            logger.error("Could not list articles for %s: %s", source.name, e)
            return []

    async def _seed_source(self, source: SourceConfig, state: State) -> State:
        logger.info("Seeding %s...", source.name)

        urls = await self._list_candidates(source)
        if not urls:
            logger.info("No articles found for %s", source.name)
            return state

        for url in urls:
            if not is_article_seen(state, url):
                state = mark_article_seen(state, url, SEED_TITLE, source.name, source.content_type)

        logger.info("Marked %d articles as seen", len(urls))
        return state

    async def _process_source(self, source: SourceConfig, state: State) -> State:
        logger.info("Checking %s...", source.name)

        urls = await self._list_candidates(source)
        if not urls:
            logger.warning("No articles found for %s", source.name)
            if is_source_alerted(state, source.name):
                return state
            await self.publisher.send_message(alert_text(source))
            return mark_source_alerted(state, source.name)

        if is_source_alerted(state, source.name):
            logger.info("%s is working again, clearing alert", source.name)
            state = clear_source_alert(state, source.name)

        new_urls = [url for url in urls if not is_article_seen(state, url)]
        logger.info("Found %d article URLs, %d new", len(urls), len(new_urls))

        for url in new_urls:
            try:
                state = await self._process_article(source, url, state)
            except Exception:
                logger.exception("Error processing %s", url)
            await self.sleep(self.settings.article_delay_seconds)

        return state

    async def _process_article(self, source: SourceConfig, url: str, state: State) -> State:
        logger.info("Processing: %s", url)
        article = await self.article_fetcher.fetch_article(url)
        logger.info("Title: %s", article.title)

        post = ArticlePost(
            title=article.title, url=url, source=source.name, content_type=source.content_type
        )
        thread_ts, summaries = await self._publish(article, post)
        if not thread_ts:
            logger.error("Failed to post to Slack: %s", url)
            return state

        await self._illustrate(article, summaries, thread_ts)
        logger.info("Posted successfully: %s", article.title)
        return mark_article_seen(state, url, article.title, source.name, source.content_type)

    async def _research(self, article: ArticleContent, content_type: ContentType) -> str:
        if not self.settings.research_enabled:
            return RESEARCH_SKIPPED
        logger.info("Running research...")
        return await self.researcher.run_research(article.text, article.title, content_type)

    async def _publish(
        self,
        article: ArticleContent,
        post: ArticlePost,
        channel: Optional[str] = None,
        processing_ts: Optional[str] = None,
        progress: Optional[ProgressAnimation] = None,
        on_root: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> Tuple[Optional[str], SummaryOutputs]:
        content_type = ContentType(post.content_type)
        summaries = await self.summarizer.generate_summaries(article.text, article.title, content_type)
        research = await self._research(article, content_type)

        # The placeholder is about to become the root message.
        if progress is not None:
            await progress.stop()

        logger.info("Posting to Slack...")
        thread_ts = await self.publisher.post_article_thread(
            post, summaries, research, channel=channel, processing_ts=processing_ts, on_root=on_root
        )
        return thread_ts, summaries

    async def _illustrate(
        self,
        article: ArticleContent,
        summaries: SummaryOutputs,
        thread_ts: str,
        channel: Optional[str] = None,
    ) -> None:
        if self.settings.image_gen_mode != "cartoon":
            return

        haiku = extract_haiku(summaries.main_summary)
        result = await self.illustrator.generate(haiku, article.title, article.text)
        if result.ok:
            await self.publisher.post_image_reply(result.image_b64, thread_ts, channel)
        else:
            logger.warning("Cartoon generation failed: %s", result.error)
            await self.publisher.post_cartoon_error(
                result.error or "unknown error", result.prompt, thread_ts, channel
            )

    async def process_manual_url(
        self,
        url: str,
        content_type: Union[ContentType, str] = ContentType.TECHNICAL,
        channel_id: Optional[str] = None,
        processing_ts: Optional[str] = None,
        on_published: Optional[Callable[[], Awaitable[None]]] = None,
        progress: Optional[ProgressAnimation] = None,
    ) -> ManualResult:
        """
        Post one article on request.

        Seen state only applies when posting to the primary channel; any
        other channel may receive the same article any number of times.

        Args:
            url: Article URL
            content_type: Prompt family to use
            channel_id: Target channel (defaults to the primary channel)
            processing_ts: Placeholder message to turn into the root post
            on_published: Awaited as soon as the root post lands, before
                the thread replies and the illustration
            progress: Animation on the placeholder, stopped before posting

        Returns:
            Success flag and a message for the requester
        """
        content_type = ContentType(content_type)
        target = channel_id or self.settings.slack_channel_id
        is_primary = target == self.settings.slack_channel_id
        logger.info("Manual request: %s (%s) -> %s", url, content_type.value, target)

        state = self.store.load()
        if is_primary and is_article_seen(state, url):
            return ManualResult(success=False, message="Article already processed")

        try:
            article = await self.article_fetcher.fetch_article(url)
            logger.info("Title: %s", article.title)
            post = ArticlePost(
                title=article.title, url=url, source=display_source(url), content_type=content_type
            )
            thread_ts, summaries = await self._publish(
                article, post, channel_id, processing_ts, progress, on_published
            )
        except Exception as e:
            logger.exception("Error processing %s", url)
            return ManualResult(success=False, message=f"Failed to fetch article: {e}")

        if not thread_ts:
            return ManualResult(success=False, message="Failed to post to Slack")

        await self._illustrate(article, summaries, thread_ts, channel_id)

        if is_primary:
            state = mark_article_seen(state, url, article.title, MANUAL_SOURCE, content_type)
            self.store.save(state)

        return ManualResult(success=True, message=f"Posted: {article.title}")


def build_orchestrator(settings: Settings, dry_run: bool = False) -> PipelineOrchestrator:
    """Wire real collaborators from settings.

    A dry run swaps in canned LLM output, a publisher that only logs and a
    store that never writes.
    """
    llm_provider: LLMProvider
    if dry_run:
        llm_provider = MockLLMProvider()
        publisher: SlackPublisher = DryRunPublisher(settings.slack_channel_id)
        store: StateStore = DryRunStateStore(settings.state_file_path)
    else:
        llm_provider = OpenAIProvider(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
        publisher = SlackPublisher(
            settings.slack_bot_token, settings.slack_channel_id, timeout=settings.fetch_timeout_seconds
        )
        store = StateStore(settings.state_file_path)

    return PipelineOrchestrator(
        settings=settings,
        sources=resolve_sources(settings),
        fetcher=FeedFetcher(timeout=settings.fetch_timeout_seconds),
        article_fetcher=ArticleFetcher(timeout=settings.fetch_timeout_seconds),
        summarizer=Summarizer(llm_provider, settings.summary_model),
        researcher=Researcher(llm_provider, settings.research_model),
        illustrator=CartoonIllustrator(llm_provider, settings.script_model, settings.image_model),
        publisher=publisher,
        store=store,
        llm_provider=llm_provider,
    )
