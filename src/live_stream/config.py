"""Configuration for the Live Signal Stream client."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.settings import Settings, get_settings


class ConnectionState(str, Enum):
    """Lifecycle states of the streaming socket."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class SignalDirection(str, Enum):
    """Direction of a broadcast trading signal."""
    BUY = "buy"
    SELL = "sell"


class FrameType(str, Enum):
    """Tagged frame kinds accepted on the streaming socket."""
    SIGNAL = "signal"
    CONNECTION = "connection"


class NotificationKind(str, Enum):
    """Events surfaced to whatever view hosts the client."""
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    CONNECTION_ERROR = "connection_error"
    CONNECTION_FAILED = "connection_failed"
    NEW_SIGNAL = "new_signal"
    TEST_SIGNAL_SENT = "test_signal_sent"
    TEST_SIGNAL_FAILED = "test_signal_failed"


# ── Default Constants ────────────────────────────────────────────────

DEFAULT_BUFFER_CAPACITY = 50
DEFAULT_MAX_RECONNECT_ATTEMPTS = 5
DEFAULT_RECONNECT_BASE_DELAY = 1.0  # seconds, doubled per attempt
DEFAULT_STATUS_POLL_INTERVAL = 30.0  # seconds
DEFAULT_WS_PATH = "/ws"
DEFAULT_TEST_SYMBOL = "BTCUSDT"


@dataclass
class LiveStreamConfig:
    """Tunables for one LiveSignalStream instance."""

    page_url: str = "http://localhost:8000"
    ws_path: str = DEFAULT_WS_PATH
    status_path: str = "/api/admin/live-streaming"
    test_signal_path: str = "/api/admin/live-streaming/test"
    request_timeout: float = 10.0
    status_poll_interval: float = DEFAULT_STATUS_POLL_INTERVAL
    max_reconnect_attempts: int = DEFAULT_MAX_RECONNECT_ATTEMPTS
    reconnect_base_delay: float = DEFAULT_RECONNECT_BASE_DELAY
    buffer_capacity: int = DEFAULT_BUFFER_CAPACITY
    default_test_symbol: str = DEFAULT_TEST_SYMBOL

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides) -> "LiveStreamConfig":
        """Build a config from environment settings, with explicit overrides."""
        s = settings or get_settings()
        values = dict(
            page_url=s.page_url,
            ws_path=s.ws_path,
            status_path=s.status_path,
            test_signal_path=s.test_signal_path,
            request_timeout=s.request_timeout,
            status_poll_interval=s.status_poll_interval,
            max_reconnect_attempts=s.max_reconnect_attempts,
            reconnect_base_delay=s.reconnect_base_delay,
            buffer_capacity=s.signal_buffer_capacity,
            default_test_symbol=s.default_test_symbol,
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
