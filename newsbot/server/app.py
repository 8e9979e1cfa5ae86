"""HTTP surface: health check, cron trigger and Slack slash commands."""

import asyncio
import hashlib
import hmac
import logging
import re
import threading
import time
from typing import Callable, Optional, Tuple

import httpx
from flask import Flask, Response, jsonify, request

from ..config import ContentType, Settings
from ..errors import ConfigError
from ..pipeline import PipelineOrchestrator, build_orchestrator
from ..publishing import DEFAULT_FRAMES, ProgressAnimation

logger = logging.getLogger(__name__)

SIGNATURE_MAX_AGE_SECONDS = 60 * 5
USAGE_TEXT = "Usage: /ai-news <url> [announcement]\nExample: /ai-news https://example.com/article"

_SLACK_LINK_RE = re.compile(r"<([^|>]+)(?:\|[^>]*)?>")
_URL_RE = re.compile(r"https?://\S+")
_ANNOUNCEMENT_RE = re.compile(r"\bannouncement\b", re.IGNORECASE)

OrchestratorFactory = Callable[[Settings], PipelineOrchestrator]
Spawn = Callable[[Callable[[], None]], None]


def verify_slack_signature(
    body: bytes,
    timestamp: str,
    signature: str,
    signing_secret: Optional[str],
    now: Optional[float] = None,
) -> bool:
    """Check a Slack v0 request signature.

    Verification is skipped when no signing secret is configured.
    """
    if not signing_secret:
        return True

    try:
        request_time = int(timestamp)
    except (TypeError, ValueError):
        return False

    current = time.time() if now is None else now
    if request_time < current - SIGNATURE_MAX_AGE_SECONDS:
        return False

    basestring = b"v0:" + timestamp.encode("utf-8") + b":" + body
    expected = "v0=" + hmac.new(signing_secret.encode("utf-8"), basestring, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature or "")


def parse_command_text(text: str) -> Tuple[Optional[str], ContentType]:
    """
    Pull the article URL and classification out of slash command text.

    Accepts Slack link syntax (``<url|label>``) or a bare URL anywhere in
    the text. The word ``announcement`` outside the URL selects the
    announcement prompts.

    Returns:
        (url or None, content type)
    """
    text = (text or "").strip()
    url = None
    rest = text

    link = _SLACK_LINK_RE.search(text)
    if link and link.group(1).startswith("http"):
        url = link.group(1)
        rest = text[: link.start()] + " " + text[link.end():]
    else:
        match = _URL_RE.search(text)
        if match:
            url = match.group(0)
            rest = text[: match.start()] + " " + text[match.end():]

    content_type = ContentType.ANNOUNCEMENT if _ANNOUNCEMENT_RE.search(rest) else ContentType.TECHNICAL
    return url, content_type


def _spawn_thread(target: Callable[[], None]) -> None:
    threading.Thread(target=target, daemon=True).start()


async def send_slack_response(
    response_url: str,
    text: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """POST an ephemeral follow-up to a slash command's response URL."""
    if not response_url:
        return
    try:
        async with httpx.AsyncClient(timeout=30.0, transport=transport) as client:
            response = await client.post(response_url, json={"text": text, "response_type": "ephemeral"})
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("Failed to send slash command response: %s", e)


async def handle_slash_command(
    orchestrator: PipelineOrchestrator,
    url: str,
    content_type: ContentType,
    channel_id: Optional[str],
    response_url: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """Run a slash command request: placeholder, manual pipeline, follow-up."""
    publisher = orchestrator.publisher
    placeholder = await publisher.post_message(DEFAULT_FRAMES[0], channel_id)

    animation = None
    if placeholder:
        animation = ProgressAnimation(publisher, placeholder, channel_id)
        animation.start()

    published = False

    async def on_published() -> None:
        nonlocal published
        published = True
        if animation is not None:
            await animation.stop()

    try:
        result = await orchestrator.process_manual_url(
            url,
            content_type,
            channel_id=channel_id,
            processing_ts=placeholder,
            on_published=on_published,
            progress=animation,
        )
    finally:
        if animation is not None:
            await animation.stop()

    # Once the root landed the placeholder is the root, even if a reply failed.
    if placeholder and not published:
        await publisher.delete_message(placeholder, channel_id)

    prefix = "✅" if result.success else "❌"
    await send_slack_response(response_url, f"{prefix} {result.message}", transport)


def create_app(
    settings: Settings,
    orchestrator_factory: OrchestratorFactory = build_orchestrator,
    spawn: Spawn = _spawn_thread,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        settings: Runtime settings
        orchestrator_factory: Builds a fresh orchestrator for each background job
        spawn: Starts a background job (a daemon thread by default)
        transport: Optional httpx transport for response URL calls (tests)
    """
    app = Flask(__name__)
    batch_lock = threading.Lock()

    def run_batch(seed_mode: bool) -> None:
        try:
            orchestrator = orchestrator_factory(settings)
            result = asyncio.run(orchestrator.run_scrape_check(seed_mode=seed_mode))
            logger.info("Cron complete: %d processed, %d failed", result.processed, result.failed)
        except Exception:
            logger.exception("Cron error")
        finally:
            batch_lock.release()

    def run_command(url: str, content_type: ContentType, channel_id: Optional[str], response_url: str) -> None:
        try:
            orchestrator = orchestrator_factory(settings)
            asyncio.run(
                handle_slash_command(orchestrator, url, content_type, channel_id, response_url, transport)
            )
        except ConfigError as e:
            logger.error("Slash command configuration error: %s", e)
            asyncio.run(send_slack_response(response_url, f"❌ Configuration error: {e}", transport))
        except Exception as e:
            logger.exception("Slash command failed for %s", url)
            asyncio.run(send_slack_response(response_url, f"❌ Error: {e}", transport))

    @app.route("/")
    @app.route("/health")
    def health():
        return Response("OK", status=200, mimetype="text/plain")

    @app.route("/cron", methods=["GET", "POST"])
    def cron():
        if settings.webhook_secret:
            if request.headers.get("Authorization") != f"Bearer {settings.webhook_secret}":
                return Response("Unauthorized", status=401, mimetype="text/plain")

        seed_mode = request.args.get("seed") == "true"
        if not batch_lock.acquire(blocking=False):
            logger.warning("Cron trigger ignored: a run is already in progress")
            return jsonify({"status": "already_running", "seedMode": seed_mode})

        try:
            spawn(lambda: run_batch(seed_mode))
        except RuntimeError:
            batch_lock.release()
            raise
        return jsonify({"status": "started", "seedMode": seed_mode})

    @app.route("/slack", methods=["POST"])
    @app.route("/slack/commands", methods=["POST"])
    def slack_command():
        body = request.get_data(cache=True)
        if not verify_slack_signature(
            body,
            request.headers.get("X-Slack-Request-Timestamp", ""),
            request.headers.get("X-Slack-Signature", ""),
            settings.slack_signing_secret,
        ):
            return Response("Invalid signature", status=401, mimetype="text/plain")

        url, content_type = parse_command_text(request.form.get("text", ""))
        if not url:
            return jsonify({"response_type": "ephemeral", "text": USAGE_TEXT})

        channel_id = request.form.get("channel_id") or None
        response_url = request.form.get("response_url", "")
        logger.info(
            "Slash command from %s: %s (%s)", request.form.get("user_name", "?"), url, content_type.value
        )

        spawn(lambda: run_command(url, content_type, channel_id, response_url))
        return jsonify({"response_type": "ephemeral", "text": f"⏳ Processing {url}..."})

    @app.errorhandler(404)
    def not_found(error):
        return Response("Not Found", status=404, mimetype="text/plain")

    return app
