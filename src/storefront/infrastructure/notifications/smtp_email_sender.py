"""SMTP-backed EmailSender."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from storefront.application.ports import EmailSender, SendResult

logger = logging.getLogger(__name__)


class SmtpEmailSender(EmailSender):
    """Sends HTML mail with a plain-text fallback part.

    With no host configured every send is skipped and reported as a
    success, so a development setup never fails an order over email.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        user: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._user = user
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def send(self, recipient: str, subject: str, html: str) -> SendResult:
        if not self._host:
            logger.warning("SMTP not configured; email '%s' to %s not sent", subject, recipient)
            return SendResult(success=True, skipped=True)

        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable mail client.")
        message.add_alternative(html, subtype="html")

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                if self._use_tls:
                    server.starttls()
                if self._user:
                    server.login(self._user, self._password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Email '%s' to %s failed: %s", subject, recipient, exc)
            return SendResult(success=False, error=str(exc))

        logger.info("Email '%s' sent to %s", subject, recipient)
        return SendResult(success=True, reference=message["Message-ID"])
