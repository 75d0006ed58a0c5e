"""Resend HTTP client for transactional email.

No retries: a failed send is logged by the caller and picked up again by the
next scheduled check cycle.
"""

import logging
from typing import Optional

import httpx

from app.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class ResendAPIClient:
    """Client for the Resend email API."""

    def __init__(self, api_key: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.RESEND_API_URL.rstrip("/")
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.sender = settings.EMAIL_FROM
        self.timeout = settings.HTTP_TIMEOUT_SECONDS
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        self._transport = transport

    async def send_email(self, to: str, subject: str, html: str) -> dict:
        """
        Send one HTML email.

        Raises httpx.HTTPStatusError on a non-2xx response and
        httpx.TransportError when the API cannot be reached.
        """
        url = f"{self.base_url}/emails"
        payload = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(url, json=payload, headers=self.headers)
            response.raise_for_status()
            result = response.json()

        logger.info(f"Email sent to {to} (id: {result.get('id', 'n/a')})")
        return result
