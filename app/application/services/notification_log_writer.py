"""Best-effort writer for notification log entries."""

from typing import List, Optional

import structlog

from app.core.exceptions import LogWriteError
from app.domain.repositories.notification_repository import NotificationLogRepository
from app.domain.schemas.notification import Channel, DeliveryStatus, NotificationLogCreate, NotificationType

logger = structlog.get_logger(__name__)


class NotificationLogWriter:
    """Appends one entry per (medicine, cadence, channel) outcome.

    A failing sink never raises into the delivery flow: the failure is logged
    on its own event and collected in ``failures`` for the cycle report.
    """

    def __init__(self, repo: NotificationLogRepository, db=None):
        self.repo = repo
        self.db = db
        self.failures: List[LogWriteError] = []

    def record(
        self,
        medicine_id: int,
        notification_type: NotificationType,
        channel: Channel,
        status: DeliveryStatus,
        message: str,
        email: Optional[str] = None,
        error: Optional[str] = None,
    ) -> bool:
        entry = NotificationLogCreate(
            medicine_id=medicine_id,
            type=notification_type,
            channel=channel,
            status=status,
            message=message,
            email=email,
            error=error,
        )
        try:
            self.repo.append(entry)
            return True
        except Exception as exc:
            if self.db is not None:
                self.db.rollback()
            failure = LogWriteError(
                f"Could not write {channel.value} {status.value} log entry: {exc}",
                {"medicine_id": medicine_id, "type": notification_type.value, "channel": channel.value},
            )
            self.failures.append(failure)
            logger.error(
                "notification_log_write_failed",
                medicine_id=medicine_id,
                type=notification_type.value,
                channel=channel.value,
                status=status.value,
                error=str(exc),
            )
            return False
