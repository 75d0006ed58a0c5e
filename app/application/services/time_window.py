"""Notification time window — decides whether "now" is close enough to the configured time."""

from datetime import datetime

import pytz

from app.config import get_settings
from app.core.exceptions import InvalidNotificationTimeError

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)


def local_now() -> datetime:
    """Current wall-clock time in the configured timezone, as a naive datetime."""
    return datetime.now(tz).replace(tzinfo=None)


def parse_notification_time(value: str) -> tuple[int, int]:
    """Parse 'HH:MM' into (hour, minute)."""
    try:
        hour_str, minute_str = str(value).strip().split(":")
        hour, minute = int(hour_str), int(minute_str)
    except (TypeError, ValueError):
        raise InvalidNotificationTimeError(value)
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidNotificationTimeError(value)
    return hour, minute


def minutes_from_target(now: datetime, notification_time: str) -> int:
    """Signed whole minutes between now and today's target time.

    The target keeps the seconds of ``now``; the result is truncated toward zero.
    Only today's target is considered, so a target just before midnight is
    never matched by a time just after it.
    """
    hour, minute = parse_notification_time(notification_time)
    target = now.replace(hour=hour, minute=minute)
    return int((now - target).total_seconds() / 60)


def is_within_window(now: datetime, notification_time: str, tolerance_minutes: int | None = None) -> bool:
    if tolerance_minutes is None:
        tolerance_minutes = settings.NOTIFICATION_WINDOW_MINUTES
    return abs(minutes_from_target(now, notification_time)) <= tolerance_minutes
