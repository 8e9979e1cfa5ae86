"""Command line entry points."""

import httpx
import pytest
from conftest import make_source
from typer.testing import CliRunner

from newsbot.cli import app
from newsbot.cli import sources as sources_cli
from newsbot.config import load_sources, save_sources
from newsbot.ingestion import FeedFetcher

runner = CliRunner()


@pytest.fixture
def environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-test")
    monkeypatch.setenv("SLACK_CHANNEL_ID", "CPRIMARY")
    monkeypatch.delenv("SOURCES_FILE", raising=False)
    return monkeypatch


def test_sources_init_writes_default_registry(environment, tmp_path):
    path = tmp_path / "sources.yaml"

    result = runner.invoke(app, ["sources", "init", str(path)])

    assert result.exit_code == 0
    assert len(load_sources(path)) == 10


def test_sources_init_refuses_to_overwrite_without_force(environment, tmp_path):
    path = tmp_path / "sources.yaml"
    path.write_text("sources: []\n", encoding="utf-8")

    assert runner.invoke(app, ["sources", "init", str(path)]).exit_code == 1
    assert load_sources(path) == []

    assert runner.invoke(app, ["sources", "init", str(path), "--force"]).exit_code == 0
    assert len(load_sources(path)) == 10


def test_sources_test_keeps_going_after_a_broken_source(environment, tmp_path):
    path = tmp_path / "sources.yaml"
    save_sources([make_source("Broken", article_selector="a["), make_source("Good")], path)
    environment.setenv("SOURCES_FILE", str(path))

    page = '<a class="post" href="/blog/first-post">First</a>'
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text=page))
    environment.setattr(sources_cli, "FeedFetcher", lambda: FeedFetcher(transport=transport))

    result = runner.invoke(app, ["sources", "test"])

    assert result.exit_code == 0
    assert "Broken: Failed" in result.output
    assert "Good: 1 articles" in result.output


def test_post_with_missing_sources_file_is_a_configuration_error(environment, tmp_path):
    environment.setenv("SOURCES_FILE", str(tmp_path / "absent.yaml"))

    result = runner.invoke(app, ["post", "https://example.com/a/b"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output
