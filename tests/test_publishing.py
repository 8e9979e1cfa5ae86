"""Slack formatting and the Web API publisher."""

import asyncio
import json

import httpx
from conftest import SlackRecorder

from newsbot.config import ContentType
from newsbot.generation import SummaryOutputs
from newsbot.publishing import (
    ELI5_LABEL,
    IMAGE_CAPTION,
    SCOOP_LABEL,
    ArticlePost,
    ProgressAnimation,
    SlackPublisher,
    format_main_post,
    section_blocks,
    to_slack_markdown,
    truncate_for_slack,
)

ARTICLE = ArticlePost(
    title="Building agents",
    url="https://www.anthropic.com/engineering/agents",
    source="Anthropic Engineering",
    content_type=ContentType.TECHNICAL,
)
SUMMARIES = SummaryOutputs(main_summary="l1\nl2\nl3\n\nWhy it matters", secondary_analysis="**Simple** words")


def make_publisher(recorder):
    return SlackPublisher("xoxb-test", "CPRIMARY", transport=httpx.MockTransport(recorder))


def test_to_slack_markdown():
    text = "## Heading\n**bold** and [a link](https://x.example.com)"

    assert to_slack_markdown(text) == "*Heading*\n*bold* and <https://x.example.com|a link>"


def test_truncate_leaves_short_text_alone():
    assert truncate_for_slack("short", 100) == "short"


def test_truncate_prefers_paragraph_boundary():
    text = "a" * 80 + "\n\n" + "b" * 80

    assert truncate_for_slack(text, 100) == "a" * 80 + "\n\n_(truncated)_"


def test_truncate_hard_cut_when_no_late_paragraph_break():
    text = "a" * 20 + "\n\n" + "b" * 200

    result = truncate_for_slack(text, 100)

    assert result.endswith("…\n\n_(truncated)_")
    assert result.startswith("a" * 20)


def test_format_main_post():
    text = format_main_post(
        "Lab", "https://lab.example.com/a/b", "Title", "l1\nl2\nl3\n\nThe hook", ContentType.ANNOUNCEMENT
    )

    assert text == "📢 *Lab*\n\n> _l1_\n> _l2_\n> _l3_\n\n<https://lab.example.com/a/b|The hook>"


def test_format_main_post_falls_back_to_title():
    text = format_main_post("Lab", "https://x.example.com/a/b", "A | B", "l1\nl2\nl3", ContentType.TECHNICAL)

    assert text.startswith("🔬 *Lab*")
    assert text.endswith("<https://x.example.com/a/b|A / B>")


def test_section_blocks_truncate_and_fill_empty():
    blocks = section_blocks(ELI5_LABEL, "")

    assert blocks[0]["text"]["text"] == ELI5_LABEL
    assert blocks[1]["text"]["text"] == "_Nothing to add._"
    assert len(section_blocks("x", "y" * 5000)[1]["text"]["text"]) < 3000


def test_post_article_thread_posts_root_then_two_ordered_replies():
    recorder = SlackRecorder()

    ts = asyncio.run(make_publisher(recorder).post_article_thread(ARTICLE, SUMMARIES, "research"))

    assert ts == "1700000000.000001"
    methods = [call[0] for call in recorder.calls]
    assert methods == ["chat.postMessage"] * 3
    root, eli5, scoop = (call[1] for call in recorder.calls)
    assert root["channel"] == "CPRIMARY"
    assert root["unfurl_links"] == "true"
    assert "<https://www.anthropic.com/engineering/agents|Why it matters>" in root["text"]
    assert eli5["thread_ts"] == ts
    assert eli5["text"].startswith(f"*{ELI5_LABEL}*")
    assert json.loads(eli5["blocks"])[1]["text"]["text"] == "*Simple* words"
    assert scoop["text"].startswith(f"*{SCOOP_LABEL}*")
    assert recorder.calls[0][2] == "Bearer xoxb-test"


def test_post_article_thread_updates_placeholder():
    recorder = SlackRecorder()

    ts = asyncio.run(
        make_publisher(recorder).post_article_thread(
            ARTICLE, SUMMARIES, "research", channel="COTHER", processing_ts="111.222"
        )
    )

    assert ts == "111.222"
    assert recorder.calls[0][0] == "chat.update"
    assert recorder.calls[0][1]["ts"] == "111.222"
    assert all(call[1]["channel"] == "COTHER" for call in recorder.calls)


def test_post_article_thread_root_failure_returns_none():
    recorder = SlackRecorder(failures={"chat.postMessage": lambda params: True})

    assert asyncio.run(make_publisher(recorder).post_article_thread(ARTICLE, SUMMARIES, "r")) is None
    assert len(recorder.calls) == 1


def test_post_article_thread_reply_failure_returns_none():
    recorder = SlackRecorder(failures={"chat.postMessage": lambda params: "thread_ts" in params})

    assert asyncio.run(make_publisher(recorder).post_article_thread(ARTICLE, SUMMARIES, "r")) is None


def test_on_root_runs_after_root_even_when_a_reply_fails():
    recorder = SlackRecorder(failures={"chat.postMessage": lambda params: "thread_ts" in params})
    seen = []

    async def on_root():
        seen.append(len(recorder.calls))

    ts = asyncio.run(
        make_publisher(recorder).post_article_thread(
            ARTICLE, SUMMARIES, "r", processing_ts="111.222", on_root=on_root
        )
    )

    assert ts is None
    assert seen == [1]
    assert [call[0] for call in recorder.calls] == ["chat.update", "chat.postMessage"]


def test_on_root_is_skipped_when_root_fails():
    recorder = SlackRecorder(failures={"chat.postMessage": lambda params: True})
    seen = []

    async def on_root():
        seen.append(True)

    asyncio.run(make_publisher(recorder).post_article_thread(ARTICLE, SUMMARIES, "r", on_root=on_root))

    assert seen == []


def test_send_message_swallows_errors():
    recorder = SlackRecorder(failures={"chat.postMessage": lambda params: True})

    asyncio.run(make_publisher(recorder).send_message("alert"))

    assert recorder.calls[0][1]["text"] == "alert"


def test_transport_failure_is_reported_as_false():
    def broken(request):
        raise httpx.ConnectError("no route", request=request)

    publisher = SlackPublisher("t", "C", transport=httpx.MockTransport(broken))

    assert asyncio.run(publisher.delete_message("1.2")) is False


def test_post_image_reply_uses_external_upload_flow():
    recorder = SlackRecorder()

    ok = asyncio.run(make_publisher(recorder).post_image_reply("aW1hZ2U=", "1.2", "COTHER"))

    assert ok
    assert [call[0] for call in recorder.calls] == ["files.getUploadURLExternal", "files.completeUploadExternal"]
    assert recorder.calls[0][1]["length"] == "5"
    assert recorder.uploads == [b"image"]
    complete = recorder.calls[1][1]
    assert json.loads(complete["files"])[0]["id"] == "F1"
    assert complete["channel_id"] == "COTHER"
    assert complete["thread_ts"] == "1.2"
    assert complete["initial_comment"] == IMAGE_CAPTION


def test_cartoon_error_notice_goes_into_thread():
    recorder = SlackRecorder()

    asyncio.run(make_publisher(recorder).post_cartoon_error("quota exceeded", "draw", "1.2"))

    params = recorder.calls[0][1]
    assert params["thread_ts"] == "1.2"
    assert "quota exceeded" in params["text"]


def test_progress_animation_stops_cleanly():
    updates = []

    class Publisher:
        async def update_message(self, ts, text, channel=None):
            updates.append((ts, text))
            return True

    async def scenario():
        animation = ProgressAnimation(Publisher(), "9.9", frames=["a", "b"], interval=0.01)
        animation.start()
        await asyncio.sleep(0.05)
        await animation.stop()
        count = len(updates)
        await asyncio.sleep(0.03)
        await animation.stop()
        return count

    count = asyncio.run(scenario())

    assert count > 0
    assert len(updates) == count
    assert updates[0] == ("9.9", "b")
