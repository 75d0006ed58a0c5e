"""Calendar predicates used to gate the weekly and monthly reminders.

Weeks start on Sunday (index 0), so the current week ends on Saturday.
All functions are pure and work on naive or aware datetimes alike.
"""

import calendar
from datetime import datetime, timedelta

SUNDAY = 0
MONDAY = 1
SATURDAY = 6


def day_of_week(moment: datetime) -> int:
    """Day index with Sunday = 0 ... Saturday = 6."""
    return (moment.weekday() + 1) % 7


def is_weekly_reminder_day(moment: datetime) -> bool:
    return day_of_week(moment) == MONDAY


def is_monthly_reminder_day(moment: datetime) -> bool:
    return moment.day == 1


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def end_of_week(moment: datetime) -> datetime:
    """Last instant of the Saturday closing the week that contains ``moment``."""
    return end_of_day(moment + timedelta(days=SATURDAY - day_of_week(moment)))


def end_of_month(moment: datetime) -> datetime:
    last_day = calendar.monthrange(moment.year, moment.month)[1]
    return end_of_day(moment.replace(day=last_day))


def days_until(target: datetime, now: datetime) -> int:
    """Whole days from ``now`` to ``target``, truncated toward zero."""
    return int((target - now) / timedelta(days=1))


def format_display_date(moment: datetime) -> str:
    """e.g. 'March 5, 2026'."""
    return f"{moment:%B} {moment.day}, {moment.year}"
