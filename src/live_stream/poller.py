"""Periodic refresh of server-reported streaming status."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from src.live_stream.config import DEFAULT_STATUS_POLL_INTERVAL
from src.live_stream.errors import StatusFetchFailed
from src.live_stream.models import StreamingStatusSnapshot

logger = logging.getLogger(__name__)

StatusFetcher = Callable[[], Awaitable[StreamingStatusSnapshot]]
SnapshotCallback = Callable[[StreamingStatusSnapshot], None]


class StatusPoller:
    """Fetches a StreamingStatusSnapshot on a fixed interval while armed.

    The first fetch happens as soon as the poller is armed. A failed fetch
    keeps the previous snapshot; the next tick is the retry. Nothing is
    scheduled while disarmed.
    """

    def __init__(
        self,
        fetch: StatusFetcher,
        interval: float = DEFAULT_STATUS_POLL_INTERVAL,
        on_update: Optional[SnapshotCallback] = None,
    ):
        self._fetch = fetch
        self._interval = interval
        self._on_update = on_update
        self._snapshot: Optional[StreamingStatusSnapshot] = None
        self._task: Optional[asyncio.Task] = None
        self._armed = False
        self._failures = 0

    @property
    def snapshot(self) -> Optional[StreamingStatusSnapshot]:
        """Last successfully fetched snapshot, or None."""
        return self._snapshot

    @property
    def is_armed(self) -> bool:
        return self._armed

    @property
    def failure_count(self) -> int:
        return self._failures

    def arm(self) -> None:
        """Start polling (first fetch immediately). No-op if already armed."""
        if self._armed:
            return
        self._armed = True
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug("Status poller armed (every %.0fs)", self._interval)

    def disarm(self) -> None:
        """Stop polling. Safe to call more than once."""
        self._armed = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def refresh(self) -> Optional[StreamingStatusSnapshot]:
        """Fetch once and return the current snapshot (possibly stale)."""
        try:
            snapshot = await self._fetch()
        except StatusFetchFailed as exc:
            self._failures += 1
            logger.warning("Streaming status refresh failed: %s", exc.message)
            return self._snapshot

        self._snapshot = snapshot
        if self._on_update is not None:
            try:
                self._on_update(snapshot)
            except Exception as e:
                logger.error("Status update callback error: %s", e)
        return snapshot

    async def _run(self) -> None:
        while self._armed:
            try:
                await self.refresh()
            except Exception as e:
                self._failures += 1
                logger.error("Unexpected status refresh error: %s", e, exc_info=True)
            if not self._armed:
                break
            await asyncio.sleep(self._interval)
