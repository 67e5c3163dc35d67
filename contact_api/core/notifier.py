"""
Form2Chat notifier.

Forwards validated contact submissions to the Form2Chat contact-form API so the
site owner gets an alert. Delivery is best effort: `notify` never raises, it
returns a NotifierResult that callers are free to ignore.
"""

import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict

from contact_api.core.errors import NotifierFailure
from contact_api.models.contact import ContactSubmission

logger = logging.getLogger(__name__)


class NotifierResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    delivered: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class Form2ChatNotifier:
    def __init__(self, client: httpx.AsyncClient, api_url: str, api_key: str = "", timeout: float = 15.0):
        self.client = client
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout

    async def notify(self, submission: ContactSubmission) -> NotifierResult:
        """
        POST the submission to Form2Chat.

        Args:
            submission: The trimmed contact submission

        Returns:
            NotifierResult: delivered=True on a 2xx reply, otherwise the failure description
        """
        status_code = None
        try:
            response = await self.client.post(
                self.api_url,
                json=submission.model_dump(),
                headers={
                    "Content-Type": "application/json",
                    "X-API-Key": self.api_key or ""
                },
                timeout=self.timeout
            )
            status_code = response.status_code

            if not response.is_success:
                raise NotifierFailure(f"Form2Chat responded with status {response.status_code}")

            logger.info(f"✅ Contact message from {submission.email} forwarded to Form2Chat")
            return NotifierResult(delivered=True, status_code=status_code)

        except Exception as e:
            logger.error(f"❌ Error sending to external API: {str(e)}")
            return NotifierResult(delivered=False, status_code=status_code, error=str(e) or type(e).__name__)
