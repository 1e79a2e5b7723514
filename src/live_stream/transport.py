"""Socket transport and timer scheduling for the connection supervisor.

The supervisor never touches a socket or the event loop directly. It
asks a transport factory for a StreamTransport and receives lifecycle
callbacks (open, message, error, close) through the TransportListener
protocol; reconnect delays go through a Scheduler. Tests swap both for
in-memory fakes.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Protocol, Union

import websockets

from src.live_stream.errors import ConnectionClosed, TransportError

logger = logging.getLogger(__name__)


class TransportListener(Protocol):
    """Receiver of transport lifecycle callbacks."""

    def handle_open(self, transport: "StreamTransport") -> None: ...

    def handle_message(self, transport: "StreamTransport", raw: Union[str, bytes]) -> None: ...

    def handle_error(self, transport: "StreamTransport", error: TransportError) -> None: ...

    def handle_close(self, transport: "StreamTransport", reason: ConnectionClosed) -> None: ...


class StreamTransport(ABC):
    """One socket connection attempt.

    ``open`` must not block; the outcome is reported to the listener. A
    transport reports ``handle_close`` exactly once unless it was closed
    locally via ``close``.
    """

    def __init__(self, listener: TransportListener):
        self._listener = listener

    @abstractmethod
    def open(self, url: str) -> None:
        """Begin connecting to *url*."""

    @abstractmethod
    def close(self) -> None:
        """Close the socket. Safe to call more than once."""


TransportFactory = Callable[[TransportListener], StreamTransport]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by the running event loop's ``call_later``."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class WebsocketTransport(StreamTransport):
    """StreamTransport over the ``websockets`` client.

    A single reader task per connection delivers frames to the listener
    in arrival order.
    """

    def __init__(
        self,
        listener: TransportListener,
        open_timeout: float = 10.0,
        ping_interval: Optional[float] = 20.0,
    ):
        super().__init__(listener)
        self._open_timeout = open_timeout
        self._ping_interval = ping_interval
        self._task: Optional[asyncio.Task] = None
        self._ws: Any = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._ws is not None

    def open(self, url: str) -> None:
        if self._task is not None:
            raise TransportError("Transport already opened")
        self._task = asyncio.get_running_loop().create_task(self._run(url))

    def close(self) -> None:
        self._closed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _run(self, url: str) -> None:
        reason = ConnectionClosed("Connection closed")
        try:
            async with websockets.connect(
                url,
                open_timeout=self._open_timeout,
                ping_interval=self._ping_interval,
            ) as ws:
                self._ws = ws
                self._listener.handle_open(self)
                async for message in ws:
                    self._listener.handle_message(self, message)
                reason = ConnectionClosed("Connection closed by server", ws.close_code)
        except asyncio.CancelledError:
            logger.debug("Stream transport for %s cancelled", url)
            raise
        except websockets.ConnectionClosed as exc:
            code = exc.rcvd.code if exc.rcvd is not None else None
            reason = ConnectionClosed(f"Connection lost: {exc}", code)
            logger.info("Stream socket closed abnormally: %s", exc)
        except (OSError, asyncio.TimeoutError, websockets.WebSocketException) as exc:
            logger.warning("Stream transport error for %s: %s", url, exc)
            self._listener.handle_error(self, TransportError(f"{type(exc).__name__}: {exc}"))
            reason = ConnectionClosed(f"Connection failed: {exc}")
        except Exception as e:
            logger.error("Stream listener failed for %s: %s", url, e, exc_info=True)
            reason = ConnectionClosed(f"Listener error: {type(e).__name__}: {e}")
        finally:
            self._ws = None

        if not self._closed:
            self._listener.handle_close(self, reason)
