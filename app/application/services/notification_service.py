"""Notification service — the medicine expiry reminder check cycle.

Features:
- Time-window gate around the configured notification time (bypassed by force)
- Daily, weekly (Mondays) and monthly (1st of month) consolidated reminders
- Email and web-push delivery with one log entry per channel outcome
- Daily reminders mark medicines as notified once the send has gone out

There is no transaction around "send, then mark notified": if the process dies
between the two, the next daily cycle sends the same medicines again.
Overlapping cycles (a forced check during a scheduled one) are not guarded
against and may double-send.
"""

from datetime import datetime
from typing import Awaitable, Callable, List, Optional

import structlog
from sqlalchemy.orm import Session

from app.application.services.channel_dispatchers import EmailDispatcher, PushDispatcher
from app.application.services.message_composer import compose_message
from app.application.services.notification_log_writer import NotificationLogWriter
from app.application.services.time_window import is_within_window, local_now
from app.config import get_settings
from app.core.exceptions import (
    ChannelTransportError,
    InvalidNotificationTimeError,
    NotificationSettingsMissingError,
)
from app.core.logging import bind_cycle_context, clear_cycle_context
from app.domain.calendar import end_of_month, end_of_week, is_monthly_reminder_day, is_weekly_reminder_day
from app.domain.models.medicine import Medicine
from app.domain.repositories.medicine_repository import MedicineRepository
from app.domain.repositories.notification_repository import NotificationSettingsRepository
from app.domain.schemas.notification import Channel, DeliveryStatus, NotificationSettingsRead, NotificationType
from app.infrastructure.repositories.medicine_repository import SQLAlchemyMedicineRepository
from app.infrastructure.repositories.notification_repository import (
    SQLAlchemyNotificationLogRepository,
    SQLAlchemyNotificationSettingsRepository,
)

settings = get_settings()
logger = structlog.get_logger(__name__)


class NotificationService:
    """Runs check cycles against injected repositories and channel dispatchers."""

    def __init__(
        self,
        medicine_repo: MedicineRepository,
        settings_repo: NotificationSettingsRepository,
        log_writer: NotificationLogWriter,
        email_dispatcher: Optional[EmailDispatcher] = None,
        push_dispatcher: Optional[PushDispatcher] = None,
        clock: Callable[[], datetime] = local_now,
        window_minutes: Optional[int] = None,
    ):
        self.medicine_repo = medicine_repo
        self.settings_repo = settings_repo
        self.log_writer = log_writer
        self.email_dispatcher = email_dispatcher or EmailDispatcher(clock=clock)
        self.push_dispatcher = push_dispatcher or PushDispatcher()
        self.clock = clock
        self.window_minutes = settings.NOTIFICATION_WINDOW_MINUTES if window_minutes is None else window_minutes

    async def run_check_cycle(self, force_check: bool = False) -> dict:
        """One check cycle: gate, then daily, weekly and monthly in that order.

        Never raises; cadence failures are logged and returned in the report.
        """
        bind_cycle_context(force_check)
        try:
            return await self._run_check_cycle(force_check)
        except Exception as exc:
            logger.exception("check_cycle_failed")
            return {"status": "failed", "errors": [{"type": "CYCLE", "error": str(exc)}]}
        finally:
            clear_cycle_context()

    async def _run_check_cycle(self, force_check: bool) -> dict:
        current = self.settings_repo.get_latest()
        if current is None:
            return {"status": "skipped", "reason": "no_settings"}

        now = self.clock()
        if not force_check:
            try:
                within_window = is_within_window(now, current.notification_time, self.window_minutes)
            except InvalidNotificationTimeError:
                logger.warning("invalid_notification_time", notification_time=current.notification_time)
                return {"status": "skipped", "reason": "invalid_notification_time"}

            logger.info(
                "time_check",
                current_time=now.strftime("%H:%M"),
                target_time=current.notification_time,
                within_window=within_window,
            )
            if not within_window:
                logger.info("skipping_notifications_outside_window")
                return {"status": "skipped", "reason": "outside_window"}

        logger.info("checking_notifications")
        self.log_writer.failures.clear()

        report = {"status": "completed", "cadences": {}, "errors": []}
        cadences = (
            (NotificationType.DAILY, self.process_daily_notifications),
            (NotificationType.WEEKLY, self.process_weekly_notifications),
            (NotificationType.MONTHLY, self.process_monthly_notifications),
        )
        for notification_type, process in cadences:
            try:
                report["cadences"][notification_type.value] = await process(current, now)
            except Exception as exc:
                logger.exception("cadence_failed", type=notification_type.value)
                report["cadences"][notification_type.value] = {"status": "failed", "error": str(exc)}
                report["errors"].append({"type": notification_type.value, "error": str(exc)})

        report["log_write_errors"] = [failure.message for failure in self.log_writer.failures]
        if report["errors"]:
            report["status"] = "completed_with_errors"
        return report

    async def process_daily_notifications(self, current: NotificationSettingsRead, now: Optional[datetime] = None) -> dict:
        """Medicines expiring by the end of the week that were not reminded yet."""
        if not current.enable_daily_notifications:
            logger.info("daily_notifications_disabled")
            return {"status": "disabled"}

        now = now or self.clock()
        medicines = self.medicine_repo.find_expiring_between(now, end_of_week(now), notified=False)
        if not medicines:
            logger.info("no_medicines_expiring", type=NotificationType.DAILY.value)
            return {"status": "empty"}

        logger.info("medicines_expiring_this_week", count=len(medicines))
        ids = [m.id for m in medicines]
        message = compose_message(medicines, NotificationType.DAILY, now)
        channels = await self.send_notification(medicines[0], NotificationType.DAILY, message, current, is_consolidated=True)

        self.medicine_repo.mark_notified(ids, self.clock())
        return {"status": "sent", "medicines": len(ids), "channels": [c.value for c in channels]}

    async def process_weekly_notifications(self, current: NotificationSettingsRead, now: Optional[datetime] = None) -> dict:
        """Monday summary of everything expiring this week, notified or not."""
        if not current.enable_weekly_notifications:
            logger.info("weekly_notifications_disabled")
            return {"status": "disabled"}

        now = now or self.clock()
        if not is_weekly_reminder_day(now):
            logger.info("skipping_weekly_notification_not_monday")
            return {"status": "not_scheduled"}

        return await self._send_summary(current, NotificationType.WEEKLY, now, end_of_week(now))

    async def process_monthly_notifications(self, current: NotificationSettingsRead, now: Optional[datetime] = None) -> dict:
        """First-of-month summary of everything expiring this month."""
        if not current.enable_monthly_notifications:
            logger.info("monthly_notifications_disabled")
            return {"status": "disabled"}

        now = now or self.clock()
        if not is_monthly_reminder_day(now):
            logger.info("skipping_monthly_notification_not_first_day")
            return {"status": "not_scheduled"}

        return await self._send_summary(current, NotificationType.MONTHLY, now, end_of_month(now))

    async def _send_summary(
        self, current: NotificationSettingsRead, notification_type: NotificationType, now: datetime, until: datetime
    ) -> dict:
        medicines = self.medicine_repo.find_expiring_between(now, until)
        if not medicines:
            logger.info("no_medicines_expiring", type=notification_type.value)
            return {"status": "empty"}

        message = compose_message(medicines, notification_type, now)
        channels = await self.send_notification(medicines[0], notification_type, message, current, is_consolidated=True)
        return {"status": "sent", "medicines": len(medicines), "channels": [c.value for c in channels]}

    async def send_notification(
        self,
        medicine: Medicine,
        notification_type: NotificationType,
        message: str,
        current: NotificationSettingsRead,
        is_consolidated: bool = False,
    ) -> List[Channel]:
        """Deliver one message through every enabled channel, email first.

        Settings are read again here since they may have changed since the
        cycle started; ``current`` is the snapshot the cadence was selected
        with. A channel failure is logged as a failed entry and raised as
        ChannelTransportError, skipping the remaining channel and any state
        update. Settings gone by send time fail the same way, logged
        against the email channel.
        """
        fresh = self.settings_repo.get_latest()
        if fresh is None:
            error = NotificationSettingsMissingError(notification_type.value)
            logger.error("notification_settings_missing_at_send", type=notification_type.value)
            self.log_writer.record(
                medicine.id, notification_type, Channel.EMAIL, DeliveryStatus.FAILED, message, error=error.message
            )
            raise error
        if fresh.id != current.id:
            logger.info("notification_settings_changed_during_cycle", previous_id=current.id, current_id=fresh.id)

        logger.info(
            "sending_notification",
            type=notification_type.value,
            target="multiple medicines" if is_consolidated else medicine.name,
        )

        delivered: List[Channel] = []
        if fresh.email_channel_ready:
            logger.info("sending_email_notification", email=fresh.email)
            await self._deliver(
                Channel.EMAIL,
                lambda: self.email_dispatcher.send(fresh.email, message, medicine, is_consolidated),
                medicine,
                notification_type,
                message,
                email=fresh.email,
            )
            delivered.append(Channel.EMAIL)

        if fresh.push_channel_ready:
            logger.info("sending_push_notification")
            await self._deliver(
                Channel.PUSH,
                lambda: self.push_dispatcher.send(fresh, message),
                medicine,
                notification_type,
                message,
            )
            delivered.append(Channel.PUSH)

        if not is_consolidated:
            self.medicine_repo.update_one(medicine.id, notified=True, notified_at=self.clock())

        logger.info("notification_sent", type=notification_type.value, channels=[c.value for c in delivered])
        return delivered

    async def _deliver(
        self,
        channel: Channel,
        send: Callable[[], Awaitable],
        medicine: Medicine,
        notification_type: NotificationType,
        message: str,
        email: Optional[str] = None,
    ) -> None:
        try:
            await send()
        except Exception as exc:
            logger.error("notification_delivery_failed", channel=channel.value, type=notification_type.value, error=str(exc))
            self.log_writer.record(
                medicine.id, notification_type, channel, DeliveryStatus.FAILED, message, email=email, error=str(exc)
            )
            raise ChannelTransportError(channel.value, str(exc)) from exc

        self.log_writer.record(medicine.id, notification_type, channel, DeliveryStatus.SUCCESS, message, email=email)


def build_notification_service(db: Session, clock: Callable[[], datetime] = local_now) -> NotificationService:
    """Wire the service against SQLAlchemy repositories and the real transports."""
    return NotificationService(
        medicine_repo=SQLAlchemyMedicineRepository(db),
        settings_repo=SQLAlchemyNotificationSettingsRepository(db),
        log_writer=NotificationLogWriter(SQLAlchemyNotificationLogRepository(db), db=db),
        clock=clock,
    )


async def check_and_send_notifications(db: Session, force_check: bool = False) -> dict:
    """Entry point for the periodic trigger and on-demand checks."""
    return await build_notification_service(db).run_check_cycle(force_check)
