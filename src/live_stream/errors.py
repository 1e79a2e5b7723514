"""Exception hierarchy for the live signal stream client.

Every error carries a StreamErrorCode so that notifications and logs
can report a stable, machine-readable reason.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class StreamErrorCode(str, Enum):
    """Machine-readable error codes."""
    MALFORMED_FRAME = "malformed_frame"
    TRANSPORT_ERROR = "transport_error"
    CONNECTION_CLOSED = "connection_closed"
    RETRY_BUDGET_EXHAUSTED = "retry_budget_exhausted"
    STATUS_FETCH_FAILED = "status_fetch_failed"
    TEST_SIGNAL_FAILED = "test_signal_failed"
    INVALID_ENDPOINT = "invalid_endpoint"


class StreamClientError(Exception):
    """Base exception for all stream client errors."""

    def __init__(
        self,
        message: str,
        error_code: StreamErrorCode = StreamErrorCode.TRANSPORT_ERROR,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or []


class MalformedFrame(StreamClientError):
    """Raised when an inbound frame is not a recognised, valid message."""

    def __init__(self, message: str = "Malformed frame", raw: Any = None):
        preview = raw if raw is None else repr(raw)[:120]
        super().__init__(message, StreamErrorCode.MALFORMED_FRAME, [{"raw": preview}])
        self.raw = raw


class TransportError(StreamClientError):
    """Raised (or reported) when the socket transport fails."""

    def __init__(self, message: str = "Transport error"):
        super().__init__(message, StreamErrorCode.TRANSPORT_ERROR)


class ConnectionClosed(StreamClientError):
    """The streaming socket closed."""

    def __init__(self, message: str = "Connection closed", code: Optional[int] = None):
        details = [{"close_code": code}] if code is not None else None
        super().__init__(message, StreamErrorCode.CONNECTION_CLOSED, details)
        self.code = code


class RetryBudgetExhausted(StreamClientError):
    """Automatic reconnection gave up after max_attempts."""

    def __init__(self, attempts: int):
        super().__init__(
            f"Gave up reconnecting after {attempts} attempts",
            StreamErrorCode.RETRY_BUDGET_EXHAUSTED,
            [{"attempts": attempts}],
        )
        self.attempts = attempts


class StatusFetchFailed(StreamClientError):
    """The streaming status endpoint could not be read."""

    def __init__(self, message: str = "Status fetch failed", status_code: Optional[int] = None):
        details = [{"status_code": status_code}] if status_code is not None else None
        super().__init__(message, StreamErrorCode.STATUS_FETCH_FAILED, details)
        self.status_code = status_code


class SignalTriggerFailed(StreamClientError):
    """The backend rejected or never answered a test-signal request."""

    def __init__(self, message: str = "Failed to send test signal", status_code: Optional[int] = None):
        details = [{"status_code": status_code}] if status_code is not None else None
        super().__init__(message, StreamErrorCode.TEST_SIGNAL_FAILED, details)
        self.status_code = status_code


class InvalidEndpoint(StreamClientError):
    """The stream URL cannot be used to open a socket."""

    def __init__(self, message: str = "Invalid stream endpoint", url: str = ""):
        super().__init__(message, StreamErrorCode.INVALID_ENDPOINT, [{"url": url}])
        self.url = url
