"""Data models for the live signal stream."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from src.live_stream.config import (
    DEFAULT_MAX_RECONNECT_ATTEMPTS,
    DEFAULT_RECONNECT_BASE_DELAY,
    NotificationKind,
    SignalDirection,
)
from src.live_stream.errors import StreamErrorCode


def _now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string (``Z`` allowed) or epoch milliseconds.

    Naive values are taken as UTC. Raises ValueError on anything else.
    """
    if isinstance(value, bool):
        raise ValueError(f"not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"timestamp out of range: {value!r}") from exc
    if isinstance(value, str) and value:
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    raise ValueError(f"not a timestamp: {value!r}")


@dataclass(frozen=True)
class SignalEvent:
    """One trading signal broadcast by the backend. Immutable once received."""

    id: str
    symbol: str
    signal_type: SignalDirection
    price: Decimal
    timestamp: datetime
    source: str = ""
    note: Optional[str] = None

    @property
    def is_buy(self) -> bool:
        return self.signal_type == SignalDirection.BUY

    @classmethod
    def from_wire(cls, data: Any) -> "SignalEvent":
        """Decode the ``data`` payload of a signal frame.

        Raises ValueError (or a subclass) when a required field is
        missing or invalid; callers translate that into MalformedFrame.
        """
        if not isinstance(data, dict):
            raise ValueError("signal payload must be an object")

        symbol = data.get("symbol")
        if not isinstance(symbol, str) or not symbol.strip():
            raise ValueError("signal symbol must be a non-empty string")

        raw_id = data.get("id")
        if raw_id is None or isinstance(raw_id, (dict, list, bool)):
            raise ValueError("signal id is required")

        direction = data.get("signalType")
        if not isinstance(direction, str):
            raise ValueError("signalType is required")
        signal_type = SignalDirection(direction.strip().lower())

        raw_price = data.get("price")
        if raw_price is None or isinstance(raw_price, bool):
            raise ValueError("price is required")
        try:
            price = Decimal(str(raw_price))
        except InvalidOperation as exc:
            raise ValueError(f"invalid price: {raw_price!r}") from exc
        if not price.is_finite() or price <= 0:
            raise ValueError(f"price must be positive: {raw_price!r}")

        note = data.get("note")
        return cls(
            id=str(raw_id),
            symbol=symbol.strip(),
            signal_type=signal_type,
            price=price,
            timestamp=parse_timestamp(data.get("timestamp")),
            source=str(data.get("source") or ""),
            note=str(note) if note else None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "symbol": self.symbol,
            "signalType": self.signal_type.value,
            "price": str(self.price),
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "note": self.note,
        }


@dataclass(frozen=True)
class StreamingStatusSnapshot:
    """Server-reported streaming status, replaced wholesale on every poll."""

    connected_clients: int = 0
    websocket_status: str = "idle"
    enabled_tickers: int = 0
    symbols: tuple[str, ...] = ()
    recent_signals: int = 0
    last_signal_at: Optional[datetime] = None
    uptime_seconds: float = 0.0
    memory: dict = field(default_factory=dict)
    fetched_at: datetime = field(default_factory=_now)

    @property
    def is_active(self) -> bool:
        return self.websocket_status == "active"

    @property
    def heap_used_bytes(self) -> int:
        return int(self.memory.get("heapUsed", 0) or 0)

    @classmethod
    def from_api(cls, data: Any) -> "StreamingStatusSnapshot":
        """Decode the status endpoint body. Raises ValueError on bad shape."""
        if not isinstance(data, dict):
            raise ValueError("status payload must be an object")
        try:
            websocket = data.get("websocket") or {}
            tickers = data.get("tickers") or {}
            signals = data.get("signals") or {}
            server = data.get("server") or {}
            last_signal = signals.get("lastSignal")
            uptime = float(server.get("uptime", 0) or 0)
            if not math.isfinite(uptime):
                raise ValueError(f"uptime is not finite: {uptime!r}")
            memory = dict(server.get("memory") or {})
            int(memory.get("heapUsed", 0) or 0)  # read later by heap_used_bytes
            return cls(
                connected_clients=int(websocket.get("connected", 0) or 0),
                websocket_status=str(websocket.get("status", "idle")),
                enabled_tickers=int(tickers.get("enabled", 0) or 0),
                symbols=tuple(str(s) for s in tickers.get("symbols") or []),
                recent_signals=int(signals.get("recent", 0) or 0),
                last_signal_at=parse_timestamp(last_signal) if last_signal else None,
                uptime_seconds=uptime,
                memory=memory,
            )
        except (AttributeError, TypeError, OverflowError, ValueError) as exc:
            raise ValueError(f"unexpected status payload: {exc}") from exc


@dataclass(frozen=True)
class StreamNotification:
    """A fire-and-forget event for the hosting view (toast, status badge)."""

    kind: NotificationKind
    title: str
    description: str = ""
    variant: str = "default"  # default | destructive
    persistent: bool = False
    signal: Optional[SignalEvent] = None
    error_code: Optional[StreamErrorCode] = None
    created_at: datetime = field(default_factory=_now)


@dataclass
class RetryState:
    """Reconnect bookkeeping for one streaming session."""

    attempt_count: int = 0
    max_attempts: int = DEFAULT_MAX_RECONNECT_ATTEMPTS
    base_delay: float = DEFAULT_RECONNECT_BASE_DELAY

    @property
    def exhausted(self) -> bool:
        return self.attempt_count >= self.max_attempts

    def next_delay(self) -> float:
        """Delay before the next reconnect: base * 2**attempt_count."""
        return self.base_delay * (2 ** self.attempt_count)

    def reset(self) -> None:
        self.attempt_count = 0
