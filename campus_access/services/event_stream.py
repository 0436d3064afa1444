# =======================================================================================
# campus_access/services/event_stream.py - Live Access Event Feed
# =======================================================================================
import threading
from typing import Callable, List
from ..models.schemas import AccessLogEntry
from ..utils.logger import get_logger

logger = get_logger("events")

Subscriber = Callable[[AccessLogEntry], None]


class AccessEventBroadcaster:
    """In-process pub/sub pushing new access log entries to connected viewers."""

    def __init__(self):
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, entry: AccessLogEntry) -> int:
        """Deliver to every subscriber; returns how many accepted the event."""
        with self._lock:
            subscribers = list(self._subscribers)

        delivered = 0
        for callback in subscribers:
            try:
                callback(entry)
                delivered += 1
            except Exception:
                # one broken viewer must not affect the tap or other viewers
                logger.exception("Live feed subscriber failed; dropping it")
                self.unsubscribe(callback)
        return delivered

# Global broadcaster
event_broadcaster = AccessEventBroadcaster()
