"""
Mail transport via the Resend HTTP API.

With no RESEND_API_KEY the mailer runs in sandbox mode: the message is logged
and a local "sandbox-<uuid>" reference is returned instead of sending. Either
way the reference is logged as the preview handle for the message.

Transport failures raise NotificationError. Callers decide whether that is
fatal; for trip creation it never is.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

import httpx

from services.planner.config import Settings
from services.planner.errors import NotificationError
from services.planner.notifications.messages import EmailMessage

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


def _format_address(name: Optional[str], address: str) -> str:
    return f"{name} <{address}>" if name else address


class Mailer:
    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._client = client
        self.sender = _format_address(settings.mail_from_name, settings.mail_from_address)

    @property
    def sandbox(self) -> bool:
        return not self.settings.resend_api_key

    async def send(self, message: EmailMessage) -> str:
        """Send one message; return the transport's reference for it."""
        if self.sandbox:
            reference = f"sandbox-{uuid.uuid4()}"
            logger.info(
                "mail_sandboxed to=%s subject=%r reference=%s",
                message.to_email,
                message.subject,
                reference,
            )
            logger.debug("mail_sandboxed_body reference=%s html=%s", reference, message.html)
            return reference

        payload: dict[str, Any] = {
            "from": self.sender,
            "to": [_format_address(message.to_name, message.to_email)],
            "subject": message.subject,
            "html": message.html,
        }
        if message.tags:
            payload["tags"] = message.tags

        try:
            resp = await self._post(payload)
        except httpx.HTTPError as exc:
            logger.error("mail_request_failed to=%s error=%s", message.to_email, exc)
            raise NotificationError(f"Mail transport unreachable: {exc}") from exc

        if resp.status_code not in (200, 201):
            logger.error(
                "mail_rejected to=%s status=%d body=%s",
                message.to_email,
                resp.status_code,
                resp.text[:300],
            )
            raise NotificationError(f"Mail transport rejected message (status {resp.status_code}).")

        # A 2xx is a send even when the body carries no {"id": ...}.
        try:
            data = resp.json()
        except ValueError:
            data = None
        reference = str(data.get("id") or "") if isinstance(data, dict) else ""
        logger.info("mail_sent to=%s reference=%s", message.to_email, reference)
        return reference

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.settings.resend_api_key}",
            "Content-Type": "application/json",
        }
        if self._client is not None:
            return await self._client.post(RESEND_API_URL, json=payload, headers=headers)
        async with httpx.AsyncClient(timeout=self.settings.mail_timeout_s) as client:
            return await client.post(RESEND_API_URL, json=payload, headers=headers)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
