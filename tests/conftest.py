"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.live_stream.errors import ConnectionClosed, TransportError  # noqa: E402
from src.live_stream.transport import StreamTransport  # noqa: E402
from src.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Isolate tests from SIGNALSTREAM_* variables and the settings cache."""
    for key in [k for k in os.environ if k.startswith("SIGNALSTREAM_")]:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeTransport(StreamTransport):
    """In-memory transport; tests fire lifecycle callbacks by hand."""

    def __init__(self, listener):
        super().__init__(listener)
        self.url = None
        self.closed = False

    def open(self, url):
        self.url = url

    def close(self):
        self.closed = True

    def fire_open(self):
        self._listener.handle_open(self)

    def fire_message(self, raw):
        self._listener.handle_message(self, raw)

    def fire_error(self, message="boom"):
        self._listener.handle_error(self, TransportError(message))

    def fire_close(self, code=1006):
        self._listener.handle_close(self, ConnectionClosed("closed", code))


class FakeTransportFactory:
    def __init__(self):
        self.created: list[FakeTransport] = []
        self.fail_with = None

    def __call__(self, listener):
        if self.fail_with is not None:
            raise self.fail_with
        transport = FakeTransport(listener)
        self.created.append(transport)
        return transport

    @property
    def latest(self) -> FakeTransport:
        return self.created[-1]


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Records call_later requests; ``fire`` runs the oldest pending one."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def call_later(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and t.callback is not None]

    @property
    def delays(self) -> list[float]:
        return [t.delay for t in self.timers]

    def fire(self):
        timer = self.pending[0]
        callback, timer.callback = timer.callback, None
        callback()


@pytest.fixture
def transports():
    return FakeTransportFactory()


@pytest.fixture
def scheduler():
    return FakeScheduler()
