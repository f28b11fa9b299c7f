"""User-facing notification stream."""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Deque, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class NotificationLevel(Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    message: str
    level: NotificationLevel
    timestamp: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "message": self.message,
            "level": self.level.value,
            "timestamp": self.timestamp,
        }


Subscriber = Callable[[Notification], None]


class NotificationCenter:
    """Keeps a bounded history and fans notifications out to subscribers."""

    def __init__(
        self,
        history: int = 50,
        time_provider: Optional[Callable[[], str]] = None,
    ) -> None:
        self._history: Deque[Notification] = deque(maxlen=history)
        self._subscribers: List[Subscriber] = []
        self._time_provider = time_provider or _utc_timestamp
        self._lock = threading.Lock()

    def publish(self, message: str, level: NotificationLevel) -> Notification:
        notification = Notification(
            message=message,
            level=level,
            timestamp=self._time_provider(),
        )
        with self._lock:
            self._history.append(notification)
            subscribers = tuple(self._subscribers)

        for subscriber in subscribers:
            try:
                subscriber(notification)
            except Exception:
                logger.exception("Notification subscriber failed")
        return notification

    def success(self, message: str) -> Notification:
        return self.publish(message, NotificationLevel.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.publish(message, NotificationLevel.ERROR)

    def info(self, message: str) -> Notification:
        return self.publish(message, NotificationLevel.INFO)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

        return unsubscribe

    def recent(self) -> Tuple[Notification, ...]:
        with self._lock:
            return tuple(reversed(self._history))

    def latest(self) -> Optional[Notification]:
        with self._lock:
            return self._history[-1] if self._history else None


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()
