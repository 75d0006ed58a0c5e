"""Notification settings — the most recently updated row is the active one."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class NotificationSettings(Base):
    __tablename__ = "notification_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Channels
    email = Column(String(255), nullable=True)
    enable_email_notifications = Column(Boolean, nullable=False, default=False)
    enable_push_notifications = Column(Boolean, nullable=False, default=False)

    # Cadences
    enable_daily_notifications = Column(Boolean, nullable=False, default=True)
    enable_weekly_notifications = Column(Boolean, nullable=False, default=False)
    enable_monthly_notifications = Column(Boolean, nullable=False, default=False)
    notification_time = Column(String(5), nullable=False, default="09:00")  # HH:MM

    # Web push subscription
    endpoint = Column(Text, nullable=True)
    p256dh = Column(String(255), nullable=True)
    auth = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), index=True)

    def __repr__(self):
        return f"<NotificationSettings {self.id} - {self.notification_time}>"
