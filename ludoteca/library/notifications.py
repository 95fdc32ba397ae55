# ludoteca/library/notifications.py
import asyncio
import itertools
from typing import Any, Callable, Optional

from ludoteca.config import settings
from ludoteca.library.state import NotificationDismissed, NotificationShown
from ludoteca.schemas.library import Notification, NotificationType


class Notifier:
    """Toast-style notifications: one at a time, gone after a fixed delay."""

    def __init__(self, dispatch: Callable[[Any], Any], delay: Optional[float] = None) -> None:
        self._dispatch = dispatch
        self._delay = settings.TOAST_SECONDS if delay is None else delay
        self._tokens = itertools.count(1)
        self._timer: Optional[asyncio.TimerHandle] = None

    def show(self, message: str, type: NotificationType = NotificationType.SUCCESS) -> Notification:
        notification = Notification(message=message, type=type, token=next(self._tokens))
        self._dispatch(NotificationShown(notification))

        # a newer toast replaces the old one, so the old timer has nothing left to hide
        self.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(
            self._delay, self._dispatch, NotificationDismissed(notification.token)
        )
        return notification

    def success(self, message: str) -> Notification:
        return self.show(message, NotificationType.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.show(message, NotificationType.ERROR)

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
