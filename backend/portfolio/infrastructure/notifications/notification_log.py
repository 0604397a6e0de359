"""Notifier and confirmer adapters for the HTTP admin API.

A browser toast has no server-side equivalent, so notifications are kept in
a bounded history that API responses read back, and mirrored to the log.
"""

import logging
from collections import deque

from portfolio.application.interfaces import Confirmer, Notifier
from portfolio.domain.entities import Notification, Severity

logger = logging.getLogger(__name__)


class NotificationLog(Notifier):
    """Bounded, newest-last notification history."""

    def __init__(self, max_size: int = 50):
        self._items: deque[Notification] = deque(maxlen=max_size)

    def show(self, notification: Notification) -> None:
        self._items.append(notification)
        level = logging.WARNING if notification.severity is Severity.ERROR else logging.INFO
        logger.log(level, "[%s] %s: %s", notification.severity.value, notification.title, notification.description)

    def history(self) -> list[Notification]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()


class StaticConfirmer(Confirmer):
    """Answers every prompt with a fixed reply, e.g. from ``?confirm=true``."""

    def __init__(self, answer: bool):
        self._answer = answer

    async def confirm(self, prompt: str) -> bool:
        logger.debug("Confirmation %r answered %s", prompt, self._answer)
        return self._answer
