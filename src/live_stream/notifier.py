"""Notification fan-out to view-layer observers."""

import logging
from typing import Callable

from src.live_stream.models import StreamNotification

logger = logging.getLogger(__name__)

NotificationCallback = Callable[[StreamNotification], None]


class Notifier:
    """Delivers StreamNotifications to subscribed callbacks.

    A failing callback is logged and skipped; it never reaches the
    component that emitted the notification.
    """

    def __init__(self):
        self._callbacks: list[NotificationCallback] = []
        self._history: list[StreamNotification] = []
        self._history_limit = 200

    def subscribe(self, callback: NotificationCallback) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it."""
        self._callbacks.append(callback)

        def _unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return _unsubscribe

    def emit(self, notification: StreamNotification) -> None:
        self._history.append(notification)
        if len(self._history) > self._history_limit:
            del self._history[0]

        for cb in list(self._callbacks):
            try:
                cb(notification)
            except Exception as e:
                logger.error("Notification callback error: %s", e)

    @property
    def history(self) -> list[StreamNotification]:
        """Recently emitted notifications, oldest first."""
        return list(self._history)
