"""Live Signal Stream client.

Real-time consumption of broadcast trading signals:
- WebSocket connection supervision with exponential-backoff reconnect
- Newest-first buffer of the last 50 signals
- Periodic streaming-status polling while streaming is on
- Start/stop toggle and test-signal trigger for the hosting view
"""

from src.live_stream.config import (
    ConnectionState,
    SignalDirection,
    FrameType,
    NotificationKind,
    LiveStreamConfig,
)
from src.live_stream.errors import (
    StreamErrorCode,
    StreamClientError,
    MalformedFrame,
    TransportError,
    ConnectionClosed,
    RetryBudgetExhausted,
    StatusFetchFailed,
    SignalTriggerFailed,
    InvalidEndpoint,
)
from src.live_stream.models import (
    SignalEvent,
    StreamingStatusSnapshot,
    StreamNotification,
    RetryState,
)
from src.live_stream.frames import SignalFrame, ConnectionFrame, decode_frame
from src.live_stream.buffer import SignalBuffer
from src.live_stream.endpoint import resolve_stream_url
from src.live_stream.notifier import Notifier
from src.live_stream.transport import (
    StreamTransport,
    TransportListener,
    AsyncioScheduler,
    WebsocketTransport,
)
from src.live_stream.supervisor import ConnectionSupervisor
from src.live_stream.poller import StatusPoller
from src.live_stream.api import StreamingApiClient
from src.live_stream.client import LiveSignalStream
from src.live_stream.formatting import (
    format_uptime,
    format_memory,
    format_price,
    describe_signal,
    format_signal_row,
    format_status,
)

__all__ = [
    # Config
    "ConnectionState",
    "SignalDirection",
    "FrameType",
    "NotificationKind",
    "LiveStreamConfig",
    # Errors
    "StreamErrorCode",
    "StreamClientError",
    "MalformedFrame",
    "TransportError",
    "ConnectionClosed",
    "RetryBudgetExhausted",
    "StatusFetchFailed",
    "SignalTriggerFailed",
    "InvalidEndpoint",
    # Models
    "SignalEvent",
    "StreamingStatusSnapshot",
    "StreamNotification",
    "RetryState",
    # Frames
    "SignalFrame",
    "ConnectionFrame",
    "decode_frame",
    # Components
    "SignalBuffer",
    "resolve_stream_url",
    "Notifier",
    "StreamTransport",
    "TransportListener",
    "AsyncioScheduler",
    "WebsocketTransport",
    "ConnectionSupervisor",
    "StatusPoller",
    "StreamingApiClient",
    "LiveSignalStream",
    # Formatting
    "format_uptime",
    "format_memory",
    "format_price",
    "describe_signal",
    "format_signal_row",
    "format_status",
]
