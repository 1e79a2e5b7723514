"""Fixed-capacity, newest-first buffer of received signals."""

from collections import deque
from typing import Iterator

from src.live_stream.config import DEFAULT_BUFFER_CAPACITY
from src.live_stream.models import SignalEvent


class SignalBuffer:
    """Display log of the most recent signals.

    Newest first. Pushing beyond capacity drops the oldest entry. Entries
    are never modified and duplicate ids are kept as separate entries.
    """

    def __init__(self, capacity: int = DEFAULT_BUFFER_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._events: deque[SignalEvent] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, event: SignalEvent) -> None:
        """Prepend an event, evicting the oldest when full."""
        self._events.appendleft(event)

    def snapshot(self) -> tuple[SignalEvent, ...]:
        """Current contents, newest first."""
        return tuple(self._events)

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[SignalEvent]:
        return iter(tuple(self._events))
