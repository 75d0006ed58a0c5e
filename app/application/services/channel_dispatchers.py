"""Channel dispatchers — deliver one composed message through email or web push.

Each dispatcher lets transport errors propagate unchanged; the notification
service turns them into failed log entries.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

import httpx

from app.application.services.email_templates import render_consolidated_email, render_medicine_alert_email
from app.application.services.time_window import local_now
from app.config import get_settings
from app.domain.calendar import format_display_date
from app.domain.models.medicine import Medicine
from app.domain.schemas.notification import (
    NotificationSettingsRead,
    PushSubscriptionInfo,
    PushSubscriptionKeys,
)
from app.infrastructure.resend_api import ResendAPIClient
from app.infrastructure.web_push import WebPushClient

settings = get_settings()
logger = logging.getLogger(__name__)

ALERT_SUBJECT = "Medicine Expiry Alert"


def email_subject(is_consolidated: bool, now: datetime) -> str:
    if is_consolidated:
        return f"Medicine Expiry Summary - {format_display_date(now)}"
    return ALERT_SUBJECT


class EmailDispatcher:
    """Renders the HTML email and hands it to Resend.

    In test mode every email goes to the test recipient; the body names the
    address it was meant for.
    """

    def __init__(
        self,
        client: Optional[ResendAPIClient] = None,
        test_mode: Optional[bool] = None,
        test_recipient: Optional[str] = None,
        clock: Callable[[], datetime] = local_now,
    ):
        self.client = client or ResendAPIClient()
        self.test_mode = settings.email_test_mode if test_mode is None else test_mode
        self.test_recipient = test_recipient or settings.TEST_EMAIL_RECIPIENT
        self.clock = clock

    def resolve_recipient(self, email: str) -> str:
        return self.test_recipient if self.test_mode else email

    def render(self, email: str, message: str, medicine: Medicine, is_consolidated: bool) -> str:
        notice_recipient = self.test_recipient if self.test_mode else None
        if is_consolidated:
            return render_consolidated_email(message, email, notice_recipient)
        return render_medicine_alert_email(message, medicine, email, notice_recipient)

    async def send(self, email: str, message: str, medicine: Medicine, is_consolidated: bool = False) -> str:
        """Send and return the address actually used."""
        recipient = self.resolve_recipient(email)
        html = self.render(email, message, medicine, is_consolidated)
        subject = email_subject(is_consolidated, self.clock())

        try:
            await self.client.send_email(recipient, subject, html)
        except httpx.HTTPStatusError as e:
            if "validation_error" in e.response.text:
                logger.warning("Resend rejected the email; in test mode only verified addresses can receive mail")
            raise

        if self.test_mode:
            logger.info(f"Test mode: email redirected from {email} to {recipient}")
        return recipient


def build_subscription(current: NotificationSettingsRead) -> dict:
    """Subscription descriptor in the shape pywebpush expects."""
    return PushSubscriptionInfo(
        endpoint=current.endpoint,
        keys=PushSubscriptionKeys(p256dh=current.p256dh, auth=current.auth),
    ).model_dump()


class PushDispatcher:
    """Delivers the raw text message to the stored browser subscription."""

    def __init__(self, client: Optional[WebPushClient] = None):
        self.client = client or WebPushClient()

    async def send(self, current: NotificationSettingsRead, message: str) -> None:
        await self.client.send(build_subscription(current), message)
