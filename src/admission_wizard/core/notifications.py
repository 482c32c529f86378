"""
Notification Collaborators

The wizard never talks to a toast/modal system directly; it pushes
notifications to a ``Notifier``. ``LoggingNotifier`` is the default when no
UI is attached.
"""

import enum
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

logger = logging.getLogger(__name__)


class NotificationLevel(str, enum.Enum):
    """Severity of a user-facing notification."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class Notification:
    level: NotificationLevel
    title: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class Notifier(Protocol):
    def notify(self, level: NotificationLevel, title: str, message: str) -> None: ...


class LoggingNotifier:
    """Writes notifications to the log instead of a UI."""

    _log_levels = {
        NotificationLevel.SUCCESS: logging.INFO,
        NotificationLevel.INFO: logging.INFO,
        NotificationLevel.WARNING: logging.WARNING,
        NotificationLevel.ERROR: logging.ERROR,
    }

    def notify(self, level: NotificationLevel, title: str, message: str) -> None:
        logger.log(self._log_levels[level], f"NOTIFY [{level.value}] {title}: {message}")


class CollectingNotifier:
    """Keeps every notification in memory so a UI can drain them."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, level: NotificationLevel, title: str, message: str) -> None:
        self.notifications.append(Notification(level=level, title=title, message=message))

    def of_level(self, level: NotificationLevel) -> list[Notification]:
        return [n for n in self.notifications if n.level == level]

    def clear(self) -> None:
        self.notifications.clear()
