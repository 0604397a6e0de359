"""Domain entity — user-visible toast notifications."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Severity(str, Enum):
    """Notification variants shown to the admin."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass
class Notification:
    """A short title/description pair raised after a user action."""

    title: str
    description: str
    severity: Severity = Severity.INFO
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
