"""
Exception hierarchy for the notification core.

Silent no-op conditions (no settings, outside the window, nothing expiring)
are not exceptions; they are reported in the cycle result instead.
"""

from typing import Any, Dict, Optional


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidNotificationTimeError(AppError):
    """Configured notification time is not a valid HH:MM value."""
    def __init__(self, value: Any):
        super().__init__(f"Invalid notification time: {value!r}", {"notification_time": value})


class ChannelTransportError(AppError):
    """Delivery through a single channel (email or push) failed."""
    def __init__(self, channel: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.channel = channel
        super().__init__(f"{channel} delivery failed: {message}", {"channel": channel, **(details or {})})


class LogWriteError(AppError):
    """A notification log entry could not be persisted."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class NotificationSettingsMissingError(AppError):
    """The settings row disappeared between selecting medicines and sending."""
    def __init__(self, notification_type: str):
        super().__init__(
            "Notification settings not found at send time", {"notification_type": notification_type}
        )
