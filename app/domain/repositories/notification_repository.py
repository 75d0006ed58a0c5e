"""
Notification Repository Interfaces.
Settings store (single active record) and the append-only log sink.
"""

from typing import Optional, Protocol

from app.domain.models.notification_log import NotificationLog
from app.domain.schemas.notification import NotificationLogCreate, NotificationSettingsRead


class NotificationSettingsRepository(Protocol):
    """Read access to the active notification settings."""

    def get_latest(self) -> Optional[NotificationSettingsRead]:
        """Freshly read the most recently updated settings, or None if unconfigured."""
        ...


class NotificationLogRepository(Protocol):
    """Append-only sink for delivery attempts."""

    def append(self, entry: NotificationLogCreate) -> NotificationLog:
        """Persist one log entry."""
        ...
