"""Human-readable rendering of signals and streaming status."""

from decimal import Decimal
from typing import Optional

from src.live_stream.models import SignalEvent, StreamingStatusSnapshot


def format_uptime(seconds: float) -> str:
    """Render server uptime as ``"<hours>h <minutes>m"``."""
    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    return f"{hours}h {remainder // 60}m"


def format_memory(num_bytes: float) -> str:
    """Render a byte count as whole megabytes, e.g. ``"128MB"``."""
    return f"{round(num_bytes / 1024 / 1024)}MB"


def format_price(price: Decimal) -> str:
    """Render a price with thousands separators and at most 3 decimals."""
    value = Decimal(price).quantize(Decimal("0.001"))
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return f"${text}"


def describe_signal(signal: SignalEvent) -> tuple[str, str]:
    """Title and description used for a new-signal notification."""
    title = f"{signal.signal_type.value.upper()} Signal"
    return title, f"{signal.symbol} at {format_price(signal.price)}"


def format_signal_row(signal: SignalEvent) -> str:
    """One line of the live signals feed."""
    when = signal.timestamp.strftime("%H:%M:%S")
    direction = signal.signal_type.value.upper()
    return (
        f"{when}  {signal.symbol:<10s} {direction:<4s} "
        f"{format_price(signal.price):>14s}  {signal.source or '-'}  {signal.note or '-'}"
    )


def format_status(snapshot: Optional[StreamingStatusSnapshot]) -> list[str]:
    """Summary lines for the status cards; ``N/A`` when nothing was fetched yet."""
    if snapshot is None:
        return ["Server: N/A"]

    last = snapshot.last_signal_at.strftime("%H:%M:%S") if snapshot.last_signal_at else "None"
    symbols = ", ".join(snapshot.symbols) if snapshot.symbols else "No symbols enabled"
    return [
        f"WebSocket: {snapshot.connected_clients} clients ({'Active' if snapshot.is_active else 'Idle'})",
        f"Active tickers: {snapshot.enabled_tickers} [{symbols}]",
        f"Recent signals: {snapshot.recent_signals} (last: {last})",
        f"Server: up {format_uptime(snapshot.uptime_seconds)}, "
        f"{format_memory(snapshot.heap_used_bytes)} used",
    ]
