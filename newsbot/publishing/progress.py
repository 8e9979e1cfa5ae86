"""Animated "thinking" placeholder for interactive requests."""

import asyncio
import logging
from typing import Optional, Sequence

from .slack import SlackPublisher

logger = logging.getLogger(__name__)

DEFAULT_FRAMES = (
    "🤔 Reading the article",
    "🤔 Reading the article.",
    "🤔 Reading the article..",
    "🤔 Reading the article...",
)


class ProgressAnimation:
    """Cycle frames on a placeholder message until stopped.

    The loop runs as its own task; ``stop()`` cancels it and waits for the
    cancellation to finish, so no frame is written after it returns.
    """

    def __init__(
        self,
        publisher: SlackPublisher,
        ts: str,
        channel: Optional[str] = None,
        frames: Sequence[str] = DEFAULT_FRAMES,
        interval: float = 1.5,
    ) -> None:
        self.publisher = publisher
        self.ts = ts
        self.channel = channel
        self.frames = list(frames)
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start animating; no-op if already running."""
        if self.running:
            return
        self._task = asyncio.create_task(self._animate())

    async def stop(self) -> None:
        """Cancel the animation and wait for it to wind down."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _animate(self) -> None:
        index = 0
        while True:
            await asyncio.sleep(self.interval)
            index = (index + 1) % len(self.frames)
            await self.publisher.update_message(self.ts, self.frames[index], self.channel)
