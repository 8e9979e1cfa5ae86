"""Seen-state functions and the JSON store."""

import json
import re

from newsbot.config import ContentType
from newsbot.state import (
    State,
    StateStore,
    article_id,
    clear_source_alert,
    is_article_seen,
    is_source_alerted,
    mark_article_seen,
    mark_source_alerted,
)


def test_article_id_is_stable_16_hex_chars():
    url = "https://www.anthropic.com/engineering/building-effective-agents"

    assert article_id(url) == article_id(url)
    assert re.fullmatch(r"[0-9a-f]{16}", article_id(url))
    assert article_id(url) != article_id(url + "/")


def test_mark_article_seen_leaves_input_untouched():
    before = State()

    after = mark_article_seen(
        before, "https://a.example.com/x/y", "Title", "Lab", ContentType.TECHNICAL, now="2025-01-01T00:00:00Z"
    )

    assert before.seen == {}
    assert is_article_seen(after, "https://a.example.com/x/y")
    assert not is_article_seen(before, "https://a.example.com/x/y")
    assert after.seen[article_id("https://a.example.com/x/y")].posted_at == "2025-01-01T00:00:00Z"


def test_mark_article_seen_stamps_utc_time():
    state = mark_article_seen(State(), "https://a.example.com/x/y", "T", "Lab", "announcement")

    record = state.seen[article_id("https://a.example.com/x/y")]
    assert record.content_type == "announcement"
    assert record.posted_at.endswith("Z") or record.posted_at.endswith("+00:00")


def test_source_alert_latch_round_trip():
    state = mark_source_alerted(State(), "Lab", now="2025-01-01T00:00:00Z")

    assert is_source_alerted(state, "Lab")
    cleared = clear_source_alert(state, "Lab")
    assert not is_source_alerted(cleared, "Lab")
    assert is_source_alerted(state, "Lab")
    assert clear_source_alert(cleared, "Lab") is cleared


def test_load_missing_file_returns_empty_state(tmp_path):
    state = StateStore(tmp_path / "nope.json").load()

    assert state.seen == {}
    assert state.alerted_sources == {}


def test_load_corrupt_file_starts_fresh(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    assert StateStore(path).load() == State()


def test_load_wrong_shape_starts_fresh(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"seen": {"abc": {"url": 1}}}), encoding="utf-8")

    assert StateStore(path).load() == State()


def test_save_writes_documented_json_shape(tmp_path):
    path = tmp_path / "nested" / "state.json"
    store = StateStore(path)
    state = mark_article_seen(
        State(), "https://a.example.com/x/y", "Title", "Lab", ContentType.TECHNICAL, now="2025-01-01T00:00:00Z"
    )
    state = mark_source_alerted(state, "Other", now="2025-01-02T00:00:00Z")

    store.save(state)

    text = path.read_text(encoding="utf-8")
    assert text.startswith("{\n  ")
    data = json.loads(text)
    assert data == {
        "seen": {
            article_id("https://a.example.com/x/y"): {
                "url": "https://a.example.com/x/y",
                "title": "Title",
                "source": "Lab",
                "contentType": "technical",
                "postedAt": "2025-01-01T00:00:00Z",
            }
        },
        "alertedSources": {"Other": "2025-01-02T00:00:00Z"},
    }
    assert store.load() == state


def test_document_without_alerted_sources_loads(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {
                "seen": {
                    "0123456789abcdef": {
                        "url": "https://a.example.com/x/y",
                        "title": "T",
                        "source": "Lab",
                        "contentType": "technical",
                        "postedAt": "2025-01-01T00:00:00Z",
                    }
                }
            }
        ),
        encoding="utf-8",
    )

    state = StateStore(path).load()

    assert state.seen_count == 1
    assert state.alerted_sources == {}
