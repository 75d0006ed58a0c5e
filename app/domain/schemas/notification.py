"""Pydantic schemas for notification settings, log entries and push subscriptions."""

from enum import Enum
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class NotificationType(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class Channel(str, Enum):
    EMAIL = "EMAIL"
    PUSH = "PUSH"


class DeliveryStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class NotificationSettingsRead(BaseModel):
    """Immutable snapshot of the active settings row, passed explicitly to callers."""

    id: int
    email: Optional[str] = None
    enable_email_notifications: bool = False
    enable_push_notifications: bool = False
    enable_daily_notifications: bool = True
    enable_weekly_notifications: bool = False
    enable_monthly_notifications: bool = False
    notification_time: str = "09:00"
    endpoint: Optional[str] = None
    p256dh: Optional[str] = None
    auth: Optional[str] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def email_channel_ready(self) -> bool:
        return self.enable_email_notifications and bool(self.email)

    @property
    def push_channel_ready(self) -> bool:
        return self.enable_push_notifications and bool(self.endpoint)


class PushSubscriptionKeys(BaseModel):
    p256dh: Optional[str] = None
    auth: Optional[str] = None


class PushSubscriptionInfo(BaseModel):
    endpoint: str
    keys: PushSubscriptionKeys


class NotificationLogCreate(BaseModel):
    medicine_id: int
    type: NotificationType
    channel: Channel
    status: DeliveryStatus
    message: str
    email: Optional[str] = None
    error: Optional[str] = None

