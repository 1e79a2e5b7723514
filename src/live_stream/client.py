"""Live Signal Stream client: the control surface the view layer talks to.

Wires the connection supervisor, signal buffer, status poller and REST
client together behind a start/stop toggle and a test-signal trigger.
"""

import logging
import random
from typing import Optional

from src.live_stream.api import StreamingApiClient
from src.live_stream.buffer import SignalBuffer
from src.live_stream.config import (
    ConnectionState,
    LiveStreamConfig,
    NotificationKind,
    SignalDirection,
)
from src.live_stream.errors import SignalTriggerFailed
from src.live_stream.models import SignalEvent, StreamingStatusSnapshot, StreamNotification
from src.live_stream.notifier import NotificationCallback, Notifier
from src.live_stream.poller import SnapshotCallback, StatusPoller
from src.live_stream.supervisor import ConnectionSupervisor
from src.live_stream.transport import Scheduler, TransportFactory

logger = logging.getLogger(__name__)


class LiveSignalStream:
    """Real-time signal feed for one hosting view.

    Owns one socket, one reconnect timer, one poll task and one HTTP
    client; ``aclose`` releases all of them.

    Example:
        async with LiveSignalStream(LiveStreamConfig.from_settings()) as stream:
            stream.subscribe(print)
            stream.toggle_streaming()
            await asyncio.sleep(60)
            for signal in stream.signals:
                ...
    """

    def __init__(
        self,
        config: Optional[LiveStreamConfig] = None,
        api: Optional[StreamingApiClient] = None,
        transport_factory: Optional[TransportFactory] = None,
        scheduler: Optional[Scheduler] = None,
        on_status: Optional[SnapshotCallback] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or LiveStreamConfig.from_settings()
        self._notifier = Notifier()
        self._buffer = SignalBuffer(self.config.buffer_capacity)
        self._api = api or StreamingApiClient(self.config)
        self._supervisor = ConnectionSupervisor(
            self.config,
            self._buffer,
            self._notifier,
            transport_factory=transport_factory,
            scheduler=scheduler,
        )
        self._poller = StatusPoller(
            self._api.get_status,
            interval=self.config.status_poll_interval,
            on_update=on_status,
        )
        self._rng = rng or random.Random()
        self._streaming = False
        self._closed = False

    # ── State ────────────────────────────────────────────────────────

    @property
    def is_streaming(self) -> bool:
        return self._streaming

    @property
    def connection_state(self) -> ConnectionState:
        return self._supervisor.state

    @property
    def is_connected(self) -> bool:
        return self._supervisor.is_connected

    @property
    def signals(self) -> tuple[SignalEvent, ...]:
        """Buffered signals, newest first."""
        return self._buffer.snapshot()

    @property
    def status(self) -> Optional[StreamingStatusSnapshot]:
        return self._poller.snapshot

    @property
    def supervisor(self) -> ConnectionSupervisor:
        return self._supervisor

    @property
    def poller(self) -> StatusPoller:
        return self._poller

    @property
    def notifications(self) -> list[StreamNotification]:
        return self._notifier.history

    def subscribe(self, callback: NotificationCallback):
        """Register a notification observer; returns an unsubscribe function."""
        return self._notifier.subscribe(callback)

    # ── Controls ─────────────────────────────────────────────────────

    def toggle_streaming(self) -> bool:
        """Flip streaming on/off and return the new desired state."""
        if self._closed:
            logger.warning("toggle_streaming called on a closed stream")
            return False

        self._streaming = not self._streaming
        if self._streaming:
            logger.info("Streaming enabled")
            self._supervisor.start()
            self._poller.arm()
        else:
            logger.info("Streaming disabled")
            self._supervisor.stop()
            self._poller.disarm()
        return self._streaming

    async def refresh_status(self) -> Optional[StreamingStatusSnapshot]:
        """One out-of-band status fetch, allowed whether or not streaming."""
        return await self._poller.refresh()

    async def send_test_signal(
        self,
        symbol: Optional[str] = None,
        direction: Optional[SignalDirection] = None,
    ) -> bool:
        """Ask the backend to broadcast a test signal.

        Picks a random direction when none is given. The resulting signal,
        if any, arrives over the socket like any other. Returns whether the
        request succeeded.
        """
        symbol = symbol or self.config.default_test_symbol
        if direction is None:
            direction = self._rng.choice([SignalDirection.BUY, SignalDirection.SELL])

        try:
            await self._api.send_test_signal(symbol, direction)
        except SignalTriggerFailed as exc:
            logger.warning("Test signal failed: %s", exc.message)
            self._notifier.emit(StreamNotification(
                kind=NotificationKind.TEST_SIGNAL_FAILED,
                title="Error",
                description="Failed to send test signal",
                variant="destructive",
                error_code=exc.error_code,
            ))
            return False

        self._notifier.emit(StreamNotification(
            kind=NotificationKind.TEST_SIGNAL_SENT,
            title="Test Signal Sent",
            description="Test signal broadcasted to all connected clients",
        ))
        return True

    # ── Teardown ─────────────────────────────────────────────────────

    async def aclose(self) -> None:
        """Close the socket, cancel timers and the poll task, close HTTP."""
        if self._closed:
            return
        self._closed = True
        self._streaming = False
        self._supervisor.stop()
        self._poller.disarm()
        await self._api.aclose()
        logger.debug("Live signal stream closed")

    async def __aenter__(self) -> "LiveSignalStream":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
