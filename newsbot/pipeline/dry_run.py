"""Stand-ins used by ``newsbot run --dry-run``: nothing is posted or saved."""

import logging
from itertools import count
from typing import Any, Dict

from ..publishing import SlackPublisher
from ..state import State, StateStore

logger = logging.getLogger(__name__)


class DryRunPublisher(SlackPublisher):
    """Publisher that logs each API call instead of sending it."""

    def __init__(self, default_channel: str) -> None:
        super().__init__(token="dry-run", default_channel=default_channel)
        self._ts = count(1)
        self.calls: Dict[str, int] = {}

    async def _call(self, method: str, **params: Any) -> Dict[str, Any]:
        self.calls[method] = self.calls.get(method, 0) + 1
        logger.info("[dry run] %s -> %s", method, params.get("channel") or params.get("channel_id"))
        logger.debug("[dry run] %s text: %s", method, params.get("text"))
        return {"ok": True, "ts": f"dry-run.{next(self._ts):06d}"}

    async def post_image_reply(self, image_b64, thread_ts, channel=None, caption=None) -> bool:
        logger.info("[dry run] image reply (%d base64 chars) in thread %s", len(image_b64), thread_ts)
        return True


class DryRunStateStore(StateStore):
    """Reads the real state file but never writes it."""

    def save(self, state: State) -> None:
        logger.info("[dry run] not saving state (%d articles seen)", state.seen_count)
