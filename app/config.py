"""Medicine Expiry Notifier — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./medicine_tracker.db"

    # Timezone
    TIMEZONE: str = "UTC"

    # Email (Resend)
    RESEND_API_URL: str = "https://api.resend.com"
    RESEND_API_KEY: str = ""
    RESEND_TEST_KEY_PREFIX: str = "re_"  # keys with this prefix redirect to TEST_EMAIL_RECIPIENT
    EMAIL_FROM: str = "Medicine Tracker <onboarding@resend.dev>"
    TEST_EMAIL_RECIPIENT: str = "test@medicinetracker.com"

    # Web push (VAPID)
    VAPID_PRIVATE_KEY: str = ""
    VAPID_SUBJECT: str = "mailto:noreply@medicinetracker.com"

    # Transports
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Notification window tolerance (minutes either side of the target time)
    NOTIFICATION_WINDOW_MINUTES: int = 1

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def email_test_mode(self) -> bool:
        return bool(self.RESEND_TEST_KEY_PREFIX) and self.RESEND_API_KEY.startswith(self.RESEND_TEST_KEY_PREFIX)


@lru_cache
def get_settings() -> Settings:
    return Settings()
