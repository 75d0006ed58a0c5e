"""Web push client: VAPID-signed delivery through pywebpush."""

import asyncio
import logging
from typing import Optional

from pywebpush import webpush

from app.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class WebPushClient:
    """Sends a raw text payload to a browser push subscription.

    pywebpush is blocking, so each send runs in a worker thread.
    Failures raise pywebpush.WebPushException unchanged.
    """

    def __init__(self, vapid_private_key: Optional[str] = None, vapid_subject: Optional[str] = None):
        self.vapid_private_key = vapid_private_key if vapid_private_key is not None else settings.VAPID_PRIVATE_KEY
        self.vapid_subject = vapid_subject or settings.VAPID_SUBJECT
        self.timeout = settings.HTTP_TIMEOUT_SECONDS

    async def send(self, subscription: dict, message: str):
        response = await asyncio.to_thread(
            webpush,
            subscription_info=subscription,
            data=message,
            vapid_private_key=self.vapid_private_key,
            vapid_claims={"sub": self.vapid_subject},
            timeout=self.timeout,
        )
        logger.info(f"Push notification sent to {subscription.get('endpoint', '')[:60]}")
        return response
