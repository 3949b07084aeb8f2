"""In-process push channel for refresh signals."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

REFRESH_SIGNAL = "REFRESH"

SignalCallback = Callable[[str], None]


class SignalBroadcaster:
    """Fan a payload-less signal out to every subscribed callback.

    Delivery is fire-and-forget: a failing subscriber is logged and skipped.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: list[SignalCallback] = []

    def subscribe(self, callback: SignalCallback) -> Callable[[], None]:
        """Register ``callback`` and return a function that unsubscribes it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, signal: str) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(signal)
            except Exception:
                logger.exception("Subscriber failed while handling %s", signal)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)


__all__ = [
    "REFRESH_SIGNAL",
    "SignalCallback",
    "SignalBroadcaster",
]
