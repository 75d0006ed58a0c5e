"""Message composer — plain-text expiry summaries, one per cadence.

The same text is the web-push payload and the body of the consolidated email.
"""

from datetime import datetime
from typing import Sequence

from app.domain.calendar import days_until, format_display_date
from app.domain.models.medicine import Medicine
from app.domain.schemas.notification import NotificationType

HEADERS = {
    NotificationType.DAILY: ("Daily Medicine Expiry Update", "this week"),
    NotificationType.WEEKLY: ("Weekly Medicine Expiry Summary", "this week"),
    NotificationType.MONTHLY: ("Monthly Medicine Expiry Summary", "this month"),
}


def format_medicine_line(medicine: Medicine, notification_type: NotificationType, now: datetime) -> str:
    expires_on = format_display_date(medicine.expiry_date)
    if notification_type == NotificationType.DAILY:
        days = days_until(medicine.expiry_date, now)
        return f"- {medicine.name} (Expires in {days} days on {expires_on})"
    return f"- {medicine.name} (Expires: {expires_on})"


def compose_message(medicines: Sequence[Medicine], notification_type: NotificationType, now: datetime) -> str:
    """Consolidated summary, listing medicines in the order given."""
    title, period = HEADERS[notification_type]
    medicine_list = "\n".join(format_medicine_line(m, notification_type, now) for m in medicines)
    return f"{title}\n\nThe following medicines will expire {period}:\n\n{medicine_list}"
