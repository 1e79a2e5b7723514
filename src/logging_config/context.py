"""Stream Session Context.

Binds a stream session id and subscriber to every log record emitted
while a live stream is running, using contextvars so that asyncio tasks
spawned inside the context inherit it.
"""

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


_session_id_var: ContextVar[str] = ContextVar("session_id", default="")
_subscriber_var: ContextVar[str] = ContextVar("subscriber", default="")
_extra_context_var: ContextVar[dict] = ContextVar("extra_context", default={})


def generate_session_id() -> str:
    """Generate a short unique stream session id."""
    return uuid.uuid4().hex[:12]


def get_session_id() -> str:
    return _session_id_var.get()


def get_subscriber() -> str:
    return _subscriber_var.get()


def get_context_dict() -> dict[str, Any]:
    """Get all context variables as a dictionary for log binding."""
    ctx: dict[str, Any] = {}
    session_id = _session_id_var.get()
    if session_id:
        ctx["session_id"] = session_id
    subscriber = _subscriber_var.get()
    if subscriber:
        ctx["subscriber"] = subscriber
    extra = _extra_context_var.get()
    if extra:
        ctx.update(extra)
    return ctx


@dataclass
class StreamContext:
    """Context manager binding stream session data to log entries.

    Example:
        with StreamContext(subscriber="elite", extra={"endpoint": url}):
            logger.info("streaming")  # includes session_id, subscriber, endpoint
    """

    session_id: str = ""
    subscriber: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
    started_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    _tokens: list = field(default_factory=list, repr=False)

    def __post_init__(self):
        if not self.session_id:
            self.session_id = generate_session_id()

    def __enter__(self) -> "StreamContext":
        self._tokens = [
            (_session_id_var, _session_id_var.set(self.session_id)),
            (_subscriber_var, _subscriber_var.set(self.subscriber)),
            (_extra_context_var, _extra_context_var.set(self.extra.copy())),
        ]
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens.clear()

    @property
    def elapsed_seconds(self) -> float:
        """Seconds since the context was created."""
        return (datetime.now(timezone.utc) - self.started_at).total_seconds()

    def bind(self, **kwargs: Any) -> None:
        """Add extra key-value pairs to the active context."""
        _extra_context_var.set({**_extra_context_var.get(), **kwargs})
        self.extra.update(kwargs)
