"""Transient user notifications (toasts)"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional
from uuid import uuid4

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 5000

Scheduler = Callable[[float, Callable[[], None]], Any]


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notification:
    id: str
    type: NotificationType
    message: str
    duration: int = DEFAULT_DURATION_MS


def _loop_scheduler(delay: float, callback: Callable[[], None]):
    return asyncio.get_running_loop().call_later(delay, callback)


class NotificationCenter:
    """Session-wide queue of notifications.

    Every call appends a new record; nothing is merged. Each record removes
    itself after its duration (milliseconds) unless dismissed first.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None):
        self._scheduler = scheduler or _loop_scheduler
        self._items: List[Notification] = []
        self._listeners: List[Callable[[List[Notification]], None]] = []

    @property
    def active(self) -> List[Notification]:
        return list(self._items)

    def add_listener(self, callback: Callable[[List[Notification]], None]):
        """Call `callback` with the active list after every change"""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[List[Notification]], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _changed(self):
        snapshot = self.active
        for callback in list(self._listeners):
            try:
                callback(snapshot)
            except Exception as e:
                logger.error(f"Error in notification listener: {e}")

    def add(self, type: NotificationType, message: str, duration: Optional[int] = None) -> Notification:
        notification = Notification(
            id=uuid4().hex[:9],
            type=NotificationType(type),
            message=message,
            duration=duration or DEFAULT_DURATION_MS,
        )
        # Schedule first so a record is never queued without its expiry
        self._scheduler(notification.duration / 1000, lambda: self.dismiss(notification.id))
        self._items.append(notification)
        self._changed()
        return notification

    def dismiss(self, notification_id: str) -> bool:
        """Remove a notification; returns False if it was already gone"""
        remaining = [n for n in self._items if n.id != notification_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        self._changed()
        return True

    def show_success(self, message: str, duration: Optional[int] = None) -> Notification:
        return self.add(NotificationType.SUCCESS, message, duration)

    def show_error(self, message: str, duration: Optional[int] = None) -> Notification:
        return self.add(NotificationType.ERROR, message, duration)

    def show_info(self, message: str, duration: Optional[int] = None) -> Notification:
        return self.add(NotificationType.INFO, message, duration)


# Global notification center instance
notifications = NotificationCenter()
