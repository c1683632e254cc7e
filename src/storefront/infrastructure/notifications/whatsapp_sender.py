"""Twilio-backed WhatsApp MessagingSender."""

from __future__ import annotations

import logging
import re

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from storefront.application.ports import MessagingSender, SendResult

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def whatsapp_address(phone: str) -> str:
    """``55 7475-6704`` -> ``whatsapp:+5574756704``."""
    digits = _NON_DIGITS.sub("", phone)
    return f"whatsapp:+{digits}"


class TwilioWhatsAppSender(MessagingSender):
    """Missing credentials turn every send into a successful no-op."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        client: Client | None = None,
    ) -> None:
        self._from = from_number
        self._client = client
        if self._client is None and account_sid and auth_token:
            self._client = Client(account_sid, auth_token)

    @property
    def configured(self) -> bool:
        return self._client is not None

    def send(self, phone: str, body: str) -> SendResult:
        if self._client is None:
            logger.warning("Twilio not configured; WhatsApp to %s not sent", phone)
            return SendResult(success=True, skipped=True)
        if not phone or not _NON_DIGITS.sub("", phone):
            logger.warning("No usable phone number; WhatsApp not sent")
            return SendResult(success=True, skipped=True)

        try:
            message = self._client.messages.create(
                from_=self._from,
                to=whatsapp_address(phone),
                body=body,
            )
        except TwilioException as exc:
            logger.error("WhatsApp to %s failed: %s", phone, exc)
            return SendResult(success=False, error=str(exc))

        logger.info("WhatsApp sent to %s (%s)", phone, message.sid)
        return SendResult(success=True, reference=message.sid)
