"""Slack Web API publisher."""

import base64
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from ..errors import SlackAPIError
from ..generation import SummaryOutputs
from .formatting import format_main_post, section_blocks
from .models import ArticlePost

logger = logging.getLogger(__name__)

SLACK_API_URL = "https://slack.com/api"
ELI5_LABEL = "👶 ELI5"
SCOOP_LABEL = "🎯 The Scoop"
IMAGE_CAPTION = "🎨 _AI-generated illustration_"
IMAGE_FILENAME = "article-illustration.png"


class SlackPublisher:
    """Post article threads and status messages to Slack."""

    def __init__(
        self,
        token: str,
        default_channel: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize publisher.

        Args:
            token: Bot token
            default_channel: Primary channel used when no channel is given
            timeout: HTTP timeout for API calls
            transport: Optional httpx transport (tests)
        """
        self.token = token
        self.default_channel = default_channel
        self.timeout = timeout
        self.transport = transport

    async def _call(self, method: str, **params: Any) -> Dict[str, Any]:
        """Call a Web API method with form-encoded params."""
        data = {}
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, bool):
                data[key] = "true" if value else "false"
            elif isinstance(value, (list, dict)):
                data[key] = json.dumps(value)
            else:
                data[key] = str(value)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{SLACK_API_URL}/{method}",
                    data=data,
                    headers={"Authorization": f"Bearer {self.token}"},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as e:
            raise SlackAPIError(method, str(e) or e.__class__.__name__)
        except ValueError:
            raise SlackAPIError(method, "invalid JSON response")

        if not payload.get("ok"):
            raise SlackAPIError(method, payload.get("error", "unknown_error"))
        return payload

    async def post_article_thread(
        self,
        article: ArticlePost,
        summaries: SummaryOutputs,
        research: str,
        channel: Optional[str] = None,
        processing_ts: Optional[str] = None,
        on_root: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> Optional[str]:
        """
        Post an article as a root message with two thread replies.

        A failed reply does not remove the root; callers that need to know
        whether the root landed pass ``on_root``.

        Args:
            article: Article being posted
            summaries: Headline unit and explanation
            research: Research report
            channel: Target channel (defaults to the primary channel)
            processing_ts: Placeholder message to turn into the root
            on_root: Awaited once the root message is posted

        Returns:
            Root message ts, or None if the root or a reply failed
        """
        channel = channel or self.default_channel
        main_text = format_main_post(
            article.source, article.url, article.title, summaries.main_summary, article.content_type
        )

        try:
            if processing_ts:
                await self._call("chat.update", channel=channel, ts=processing_ts, text=main_text)
                thread_ts = processing_ts
            else:
                result = await self._call(
                    "chat.postMessage", channel=channel, text=main_text, unfurl_links=True
                )
                thread_ts = result.get("ts")
        except SlackAPIError as e:
            logger.error("Failed to post to Slack: %s", e)
            return None

        if not thread_ts:
            logger.error("Failed to get thread ts from main post")
            return None

        if on_root is not None:
            await on_root()

        replies = ((ELI5_LABEL, summaries.secondary_analysis), (SCOOP_LABEL, research))
        for label, body in replies:
            try:
                await self._call(
                    "chat.postMessage",
                    channel=channel,
                    thread_ts=thread_ts,
                    text=f"*{label}*\n\n{body}",
                    blocks=section_blocks(label, body),
                )
            except SlackAPIError as e:
                logger.error("Failed to post '%s' reply: %s", label, e)
                return None

        return thread_ts

    async def send_message(self, text: str) -> None:
        """Send a status message to the primary channel."""
        try:
            await self._call("chat.postMessage", channel=self.default_channel, text=text)
        except SlackAPIError as e:
            logger.error("Failed to send Slack message: %s", e)

    async def post_message(self, text: str, channel: Optional[str] = None) -> Optional[str]:
        """Post a standalone message and return its ts."""
        try:
            result = await self._call(
                "chat.postMessage", channel=channel or self.default_channel, text=text
            )
            return result.get("ts")
        except SlackAPIError as e:
            logger.error("Failed to post message: %s", e)
            return None

    async def update_message(self, ts: str, text: str, channel: Optional[str] = None) -> bool:
        """Replace the text of an existing message."""
        try:
            await self._call("chat.update", channel=channel or self.default_channel, ts=ts, text=text)
            return True
        except SlackAPIError as e:
            logger.error("Failed to update message: %s", e)
            return False

    async def delete_message(self, ts: str, channel: Optional[str] = None) -> bool:
        """Delete a message."""
        try:
            await self._call("chat.delete", channel=channel or self.default_channel, ts=ts)
            return True
        except SlackAPIError as e:
            logger.error("Failed to delete message: %s", e)
            return False

    async def post_thread_message(
        self, text: str, thread_ts: str, channel: Optional[str] = None
    ) -> Optional[str]:
        """Post a reply into a thread and return its ts."""
        try:
            result = await self._call(
                "chat.postMessage",
                channel=channel or self.default_channel,
                thread_ts=thread_ts,
                text=text,
            )
            return result.get("ts")
        except SlackAPIError as e:
            logger.error("Failed to post thread message: %s", e)
            return None

    async def post_cartoon_error(
        self,
        error: str,
        prompt: Optional[str],
        thread_ts: str,
        channel: Optional[str] = None,
    ) -> None:
        """Tell the thread why no cartoon was attached."""
        prompt_block = f"\n\n*Prompt used:*\n```{prompt[:2900]}```" if prompt else ""
        await self.post_thread_message(
            f"⚠️ *Cartoon generation failed*\n\n*Error:* {error}{prompt_block}",
            thread_ts,
            channel,
        )

    async def post_image_reply(
        self,
        image_b64: str,
        thread_ts: str,
        channel: Optional[str] = None,
        caption: Optional[str] = None,
    ) -> bool:
        """
        Upload a PNG into a thread.

        Uses the external upload flow: reserve an upload URL, send the
        bytes, then complete the upload into the channel and thread.
        """
        channel = channel or self.default_channel
        image = base64.b64decode(image_b64)

        try:
            reserved = await self._call(
                "files.getUploadURLExternal", filename=IMAGE_FILENAME, length=len(image)
            )
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    response = await client.post(reserved["upload_url"], content=image)
                    response.raise_for_status()
            except httpx.HTTPError as e:
                raise SlackAPIError("file upload", str(e) or e.__class__.__name__)

            await self._call(
                "files.completeUploadExternal",
                files=[{"id": reserved["file_id"], "title": IMAGE_FILENAME}],
                channel_id=channel,
                thread_ts=thread_ts,
                initial_comment=caption or IMAGE_CAPTION,
            )
        except (SlackAPIError, KeyError) as e:
            logger.error("Failed to post image to Slack: %s", e)
            return False

        logger.info("Image posted to thread")
        return True
