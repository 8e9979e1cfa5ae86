"""Shared fakes for pipeline and server tests."""

from typing import Dict, List, Optional
from urllib.parse import parse_qs

import httpx
import pytest

from newsbot.config import ContentType, Settings, SourceConfig
from newsbot.generation import CartoonResult, SummaryOutputs
from newsbot.ingestion import ArticleContent
from newsbot.pipeline import PipelineOrchestrator
from newsbot.state import StateStore


def make_settings(**overrides) -> Settings:
    values = {
        "openai_api_key": "sk-test",
        "slack_bot_token": "xoxb-test",
        "slack_channel_id": "CPRIMARY",
        "article_delay_seconds": 5,
    }
    values.update(overrides)
    return Settings(**values)


def make_source(name: str, content_type: ContentType = ContentType.TECHNICAL, **overrides) -> SourceConfig:
    values = {
        "name": name,
        "index_url": f"https://{name.lower()}.example.com/blog",
        "article_selector": "a.post",
        "base_url": f"https://{name.lower()}.example.com",
        "content_type": content_type,
    }
    values.update(overrides)
    return SourceConfig(**values)


class FakeFetcher:
    """Candidates per source name; an exception value is raised instead."""

    def __init__(self, candidates: Dict[str, object]):
        self.candidates = candidates
        self.calls: List[str] = []

    async def list_candidates(self, source):
        self.calls.append(source.name)
        value = self.candidates.get(source.name, [])
        if isinstance(value, Exception):
            raise value
        return list(value)


class FakeArticleFetcher:
    def __init__(self, failures: Optional[Dict[str, Exception]] = None):
        self.failures = failures or {}
        self.calls: List[str] = []

    async def fetch_article(self, url):
        self.calls.append(url)
        if url in self.failures:
            raise self.failures[url]
        return ArticleContent(
            url=url,
            title=f"Title for {url.rsplit('/', 1)[-1]}",
            text="Body paragraph.\nSecond paragraph.",
        )


class FakeSummarizer:
    def __init__(self):
        self.calls: List[str] = []

    async def generate_summaries(self, content, title, content_type):
        self.calls.append(title)
        return SummaryOutputs(main_summary="l1\nl2\nl3\n\nhook", secondary_analysis="body")


class FakeResearcher:
    def __init__(self):
        self.calls: List[str] = []

    async def run_research(self, content, title, content_type):
        self.calls.append(title)
        return "🔍 research\n\nBottom line: fine."


class FakeIllustrator:
    def __init__(self, result: Optional[CartoonResult] = None):
        self.result = result or CartoonResult(image_b64="aW1hZ2U=", prompt="draw it")
        self.calls: List[str] = []

    async def generate(self, haiku, title, excerpt):
        self.calls.append(haiku)
        return self.result


class FakePublisher:
    """Records calls; ``fail_threads`` fails the root post, ``fail_replies`` a reply after it."""

    def __init__(self, fail_threads: bool = False, fail_replies: bool = False):
        self.fail_threads = fail_threads
        self.fail_replies = fail_replies
        self.events: List[str] = []
        self.threads: List[tuple] = []
        self.messages: List[str] = []
        self.images: List[tuple] = []
        self.cartoon_errors: List[str] = []
        self.posted: List[tuple] = []
        self.updated: List[tuple] = []
        self.deleted: List[str] = []

    async def post_article_thread(
        self, article, summaries, research, channel=None, processing_ts=None, on_root=None
    ):
        if self.fail_threads:
            return None
        self.threads.append((article, summaries, research, channel, processing_ts))
        self.events.append("root")
        if on_root is not None:
            await on_root()
        if self.fail_replies:
            return None
        self.events.append("replies")
        return processing_ts or f"1700000000.{len(self.threads):06d}"

    async def send_message(self, text):
        self.messages.append(text)

    async def post_message(self, text, channel=None):
        self.posted.append((text, channel))
        return "1700000000.999999"

    async def update_message(self, ts, text, channel=None):
        self.updated.append((ts, text))
        return True

    async def delete_message(self, ts, channel=None):
        self.deleted.append(ts)
        return True

    async def post_image_reply(self, image_b64, thread_ts, channel=None, caption=None):
        self.events.append("image")
        self.images.append((image_b64, thread_ts, channel))
        return True

    async def post_cartoon_error(self, error, prompt, thread_ts, channel=None):
        self.cartoon_errors.append(error)


class SlackRecorder:
    """MockTransport handler that records calls and replies per method."""

    def __init__(self, failures=None):
        self.failures = failures or {}
        self.calls = []
        self.uploads = []
        self.ts = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "files.example.com":
            self.uploads.append(request.content)
            return httpx.Response(200, text="OK")

        method = request.url.path.rsplit("/", 1)[-1]
        params = {k: v[0] for k, v in parse_qs(request.content.decode("utf-8")).items()}
        self.calls.append((method, params, request.headers.get("Authorization")))

        failing = self.failures.get(method)
        if failing and failing(params):
            return httpx.Response(200, json={"ok": False, "error": "channel_not_found"})

        if method == "files.getUploadURLExternal":
            return httpx.Response(
                200, json={"ok": True, "upload_url": "https://files.example.com/upload/1", "file_id": "F1"}
            )
        self.ts += 1
        return httpx.Response(200, json={"ok": True, "ts": params.get("ts") or f"1700000000.{self.ts:06d}"})


class Sleeper:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


class Harness:
    """An orchestrator wired to fakes, with the fakes exposed for assertions."""

    def __init__(self, tmp_path, sources, candidates, settings=None, **fakes):
        self.settings = settings or make_settings()
        self.fetcher = fakes.get("fetcher") or FakeFetcher(candidates)
        self.article_fetcher = fakes.get("article_fetcher") or FakeArticleFetcher()
        self.summarizer = fakes.get("summarizer") or FakeSummarizer()
        self.researcher = FakeResearcher()
        self.illustrator = fakes.get("illustrator") or FakeIllustrator()
        self.publisher = fakes.get("publisher") or FakePublisher()
        self.store = StateStore(tmp_path / "state.json")
        self.sleep = Sleeper()
        self.orchestrator = PipelineOrchestrator(
            settings=self.settings,
            sources=sources,
            fetcher=self.fetcher,
            article_fetcher=self.article_fetcher,
            summarizer=self.summarizer,
            researcher=self.researcher,
            illustrator=self.illustrator,
            publisher=self.publisher,
            store=self.store,
            sleep=self.sleep,
            llm_provider=fakes.get("llm_provider"),
        )


@pytest.fixture
def harness(tmp_path):
    def build(sources, candidates, **kwargs):
        return Harness(tmp_path, sources, candidates, **kwargs)

    return build
