"""Connection supervisor for the live signal socket.

Owns the socket lifecycle as an explicit state machine:

    DISCONNECTED --start()--> CONNECTING --open--> CONNECTED
         ^                        |                    |
         +-------- close ---------+------- close ------+

After an unrequested close the supervisor schedules a reconnect after
``base_delay * 2**attempt_count`` seconds (1, 2, 4, 8, 16 with the
defaults) until ``max_attempts`` reconnects have been made; then it
gives up and emits a persistent connection-failed notification.
"""

import logging
from typing import Optional, Union

from src.live_stream.buffer import SignalBuffer
from src.live_stream.config import ConnectionState, LiveStreamConfig, NotificationKind
from src.live_stream.endpoint import resolve_stream_url
from src.live_stream.errors import (
    ConnectionClosed,
    InvalidEndpoint,
    MalformedFrame,
    RetryBudgetExhausted,
    StreamErrorCode,
    TransportError,
)
from src.live_stream.formatting import describe_signal
from src.live_stream.frames import ConnectionFrame, SignalFrame, decode_frame
from src.live_stream.models import RetryState, StreamNotification
from src.live_stream.notifier import Notifier
from src.live_stream.transport import (
    AsyncioScheduler,
    Scheduler,
    StreamTransport,
    TimerHandle,
    TransportFactory,
    WebsocketTransport,
)

logger = logging.getLogger(__name__)


class ConnectionSupervisor:
    """Keeps one streaming socket alive while streaming is desired.

    Example:
        supervisor = ConnectionSupervisor(config, buffer, notifier)
        supervisor.start()
        ...
        supervisor.stop()
    """

    def __init__(
        self,
        config: LiveStreamConfig,
        buffer: SignalBuffer,
        notifier: Notifier,
        transport_factory: Optional[TransportFactory] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self._config = config
        self._buffer = buffer
        self._notifier = notifier
        self._transport_factory = transport_factory or WebsocketTransport
        self._scheduler = scheduler or AsyncioScheduler()

        self._state = ConnectionState.DISCONNECTED
        self._retry = RetryState(
            max_attempts=config.max_reconnect_attempts,
            base_delay=config.reconnect_base_delay,
        )
        self._desired = False
        self._transport: Optional[StreamTransport] = None
        self._reconnect_handle: Optional[TimerHandle] = None
        self._gave_up = False
        self._malformed_count = 0

    # ── Introspection ────────────────────────────────────────────────

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state == ConnectionState.CONNECTED

    @property
    def desired(self) -> bool:
        """Whether streaming is wanted, regardless of the socket's state."""
        return self._desired

    @property
    def attempt_count(self) -> int:
        return self._retry.attempt_count

    @property
    def reconnect_pending(self) -> bool:
        return self._reconnect_handle is not None

    @property
    def malformed_count(self) -> int:
        return self._malformed_count

    # ── Control ──────────────────────────────────────────────────────

    def start(self) -> None:
        """Begin streaming with a fresh retry budget.

        No-op while a socket is already connecting or connected.
        """
        self._desired = True
        if self._state in (ConnectionState.CONNECTING, ConnectionState.CONNECTED):
            return
        self._cancel_reconnect()
        self._retry.reset()
        self._gave_up = False
        self._open()

    def stop(self) -> None:
        """Stop streaming: cancel any pending reconnect and close the socket."""
        self._desired = False
        self._cancel_reconnect()

        transport, self._transport = self._transport, None
        if transport is not None:
            transport.close()

        if self._state != ConnectionState.DISCONNECTED:
            previous = self._state
            self._state = ConnectionState.DISCONNECTED
            logger.info("Live stream stopped (was %s)", previous.value)
            if previous == ConnectionState.CONNECTED:
                self._emit(NotificationKind.DISCONNECTED, "Disconnected", "Live data stream stopped")

    # ── Transport callbacks ──────────────────────────────────────────

    def handle_open(self, transport: StreamTransport) -> None:
        if transport is not self._transport:
            return
        self._state = ConnectionState.CONNECTED
        self._retry.reset()
        logger.info("Live stream connected", extra={"state": self._state.value})
        self._emit(NotificationKind.CONNECTED, "Connected", "Live data stream connected")

    def handle_message(self, transport: StreamTransport, raw: Union[str, bytes]) -> None:
        if transport is not self._transport:
            return
        try:
            frame = decode_frame(raw)
        except MalformedFrame as exc:
            self._malformed_count += 1
            logger.warning("Discarding malformed frame: %s", exc.message)
            return

        if isinstance(frame, SignalFrame):
            signal = frame.signal
            self._buffer.push(signal)
            logger.info(
                "Signal received: %s %s @ %s",
                signal.symbol, signal.signal_type.value, signal.price,
                extra={"symbol": signal.symbol},
            )
            title, description = describe_signal(signal)
            self._emit(
                NotificationKind.NEW_SIGNAL,
                title,
                description,
                variant="default" if signal.is_buy else "destructive",
                signal=signal,
            )
        elif isinstance(frame, ConnectionFrame):
            logger.info("Stream connection acknowledged: %s", frame.message)

    def handle_error(self, transport: StreamTransport, error: TransportError) -> None:
        if transport is not self._transport:
            return
        logger.error("Live stream transport error: %s", error.message)
        self._emit(
            NotificationKind.CONNECTION_ERROR,
            "Connection Error",
            "Failed to connect to live data stream",
            variant="destructive",
            error_code=error.error_code,
        )

    def handle_close(self, transport: StreamTransport, reason: ConnectionClosed) -> None:
        if transport is not self._transport:
            return
        self._transport = None
        previous = self._state
        self._state = ConnectionState.DISCONNECTED
        logger.info("Live stream closed: %s", reason.message, extra={"state": self._state.value})

        if previous == ConnectionState.CONNECTED:
            self._emit(NotificationKind.DISCONNECTED, "Disconnected", "Live data stream disconnected")

        if not self._desired:
            return

        if self._retry.exhausted:
            self._give_up()
            return

        delay = self._retry.next_delay()
        logger.info(
            "Reconnecting in %.0fs (attempt %d/%d)",
            delay, self._retry.attempt_count + 1, self._retry.max_attempts,
            extra={"attempt": self._retry.attempt_count + 1, "delay_s": delay},
        )
        self._reconnect_handle = self._scheduler.call_later(delay, self._on_reconnect_timer)

    # ── Internals ────────────────────────────────────────────────────

    def _on_reconnect_timer(self) -> None:
        self._reconnect_handle = None
        # The timer may outlive a stop() that raced it
        if not self._desired or self._state != ConnectionState.DISCONNECTED:
            return
        self._retry.attempt_count += 1
        self._open()

    def _open(self) -> None:
        try:
            url = resolve_stream_url(self._config.page_url, self._config.ws_path)
        except InvalidEndpoint as exc:
            logger.error("Cannot open live stream: %s", exc.message)
            self._fail_construction(exc.error_code)
            return

        self._state = ConnectionState.CONNECTING
        try:
            transport = self._transport_factory(self)
            self._transport = transport
            transport.open(url)
        except Exception as e:
            logger.error("Failed to create stream connection to %s: %s", url, e)
            self._transport = None
            self._state = ConnectionState.DISCONNECTED
            self._fail_construction(StreamErrorCode.TRANSPORT_ERROR)
            return

        logger.info("Connecting to live stream %s", url)

    def _fail_construction(self, code: StreamErrorCode) -> None:
        self._state = ConnectionState.DISCONNECTED
        self._emit(
            NotificationKind.CONNECTION_FAILED,
            "Connection Failed",
            "Unable to establish WebSocket connection",
            variant="destructive",
            persistent=True,
            error_code=code,
        )

    def _give_up(self) -> None:
        if self._gave_up:
            return
        self._gave_up = True
        error = RetryBudgetExhausted(self._retry.attempt_count)
        logger.error(error.message, extra={"attempt": self._retry.attempt_count})
        self._emit(
            NotificationKind.CONNECTION_FAILED,
            "Connection Failed",
            "Live data stream unavailable; restart streaming to try again",
            variant="destructive",
            persistent=True,
            error_code=error.error_code,
        )

    def _cancel_reconnect(self) -> None:
        if self._reconnect_handle is not None:
            self._reconnect_handle.cancel()
            self._reconnect_handle = None

    def _emit(self, kind: NotificationKind, title: str, description: str = "", **kwargs) -> None:
        self._notifier.emit(StreamNotification(kind=kind, title=title, description=description, **kwargs))
