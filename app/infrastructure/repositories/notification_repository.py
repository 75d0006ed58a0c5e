"""
SQLAlchemy Implementations of the settings store and the notification log sink.
"""

import logging
from typing import Optional

from app.domain.models.notification_log import NotificationLog
from app.domain.models.notification_settings import NotificationSettings
from app.domain.schemas.notification import NotificationLogCreate, NotificationSettingsRead
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository

logger = logging.getLogger(__name__)


class SQLAlchemyNotificationSettingsRepository(SQLAlchemyRepository[NotificationSettings]):
    """Settings store. Always reads the newest row straight from the database."""

    def __init__(self, db, model=NotificationSettings):
        super().__init__(db, model)

    def get_latest(self) -> Optional[NotificationSettingsRead]:
        # Settings are edited outside this process; never trust the identity map
        self.db.expire_all()
        row = (
            self.db.query(NotificationSettings)
            .order_by(NotificationSettings.updated_at.desc(), NotificationSettings.id.desc())
            .first()
        )
        if row is None:
            logger.info("No notification settings configured")
            return None

        snapshot = NotificationSettingsRead.model_validate(row)
        logger.info(
            "Current notification settings: email=%s email_enabled=%s push_enabled=%s "
            "daily=%s weekly=%s monthly=%s time=%s",
            snapshot.email,
            snapshot.enable_email_notifications,
            snapshot.enable_push_notifications,
            snapshot.enable_daily_notifications,
            snapshot.enable_weekly_notifications,
            snapshot.enable_monthly_notifications,
            snapshot.notification_time,
        )
        return snapshot


class SQLAlchemyNotificationLogRepository(SQLAlchemyRepository[NotificationLog]):
    """Append-only log sink. Entries are never updated or deleted."""

    def __init__(self, db, model=NotificationLog):
        super().__init__(db, model)

    def append(self, entry: NotificationLogCreate) -> NotificationLog:
        log = NotificationLog(
            medicine_id=entry.medicine_id,
            type=entry.type.value,
            channel=entry.channel.value,
            status=entry.status.value,
            message=entry.message,
            email=entry.email,
            error=entry.error,
        )
        self.db.add(log)
        self.db.commit()
        return log
