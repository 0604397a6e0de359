"""Ports for the two UI collaborators of an admin form."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from portfolio.domain.entities import Notification, Severity

# (notifier, bucket) pairs open in the current task context
_captures: ContextVar[tuple[tuple["Notifier", list[Notification]], ...]] = ContextVar(
    "notification_captures", default=()
)


class Notifier(ABC):
    """Shows a toast-style message. Fire-and-forget.

    Subclasses implement :meth:`show`. :meth:`capture` collects what one
    caller raised; it is scoped to the calling task (and tasks it spawns), so
    concurrent requests sharing a notifier never see each other's messages.
    """

    def notify(self, title: str, description: str, severity: Severity = Severity.INFO) -> None:
        notification = Notification(title=title, description=description, severity=severity)
        for owner, bucket in _captures.get():
            if owner is self:
                bucket.append(notification)
        self.show(notification)

    @abstractmethod
    def show(self, notification: Notification) -> None:
        ...

    @abstractmethod
    def history(self) -> list[Notification]:
        """Recent notifications, oldest first."""

    @contextmanager
    def capture(self) -> Iterator[list[Notification]]:
        """Collect the notifications raised inside the ``with`` block."""
        bucket: list[Notification] = []
        token = _captures.set((*_captures.get(), (self, bucket)))
        try:
            yield bucket
        finally:
            _captures.reset(token)


class Confirmer(ABC):
    """Blocking yes/no prompt asked before destructive actions."""

    @abstractmethod
    async def confirm(self, prompt: str) -> bool:
        ...
