"""Delivery of notification events.

``NotificationDeliverer`` turns one event into one email or WhatsApp send.
``ThreadedNotificationPublisher`` runs deliveries on a small thread pool so
the request that placed the order never waits on SMTP or Twilio, and makes
sure a failed delivery is logged and then forgotten.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from storefront.application.notifications import (
    AdminOrderEmail,
    AdminOrderWhatsApp,
    CustomerOrderWhatsApp,
    Notification,
    NotificationPublisher,
    OrderConfirmationEmail,
)
from storefront.application.ports import EmailSender, MessagingSender, SendResult
from storefront.infrastructure.notifications import templates

logger = logging.getLogger(__name__)


class NotificationDeliverer:

    def __init__(
        self,
        email_sender: EmailSender,
        messaging_sender: MessagingSender,
        admin_email: str = "",
        admin_phone: str = "",
        contact_whatsapp: str = "",
    ) -> None:
        self._email = email_sender
        self._messaging = messaging_sender
        self._admin_email = admin_email
        self._admin_phone = admin_phone
        self._contact_whatsapp = contact_whatsapp

    def deliver(self, event: Notification) -> SendResult:
        if isinstance(event, OrderConfirmationEmail):
            return self._email.send(
                event.recipient,
                templates.confirmation_subject(event),
                templates.confirmation_html(event, self._contact_whatsapp),
            )
        if isinstance(event, AdminOrderEmail):
            if not self._admin_email:
                logger.warning("No admin email configured; skipping %s", type(event).__name__)
                return SendResult(success=True, skipped=True)
            return self._email.send(
                self._admin_email,
                templates.admin_subject(event),
                templates.admin_html(event),
            )
        if isinstance(event, CustomerOrderWhatsApp):
            return self._messaging.send(event.phone, templates.customer_whatsapp_text(event))
        if isinstance(event, AdminOrderWhatsApp):
            if not self._admin_phone:
                logger.warning("No admin phone configured; skipping %s", type(event).__name__)
                return SendResult(success=True, skipped=True)
            return self._messaging.send(self._admin_phone, templates.admin_whatsapp_text(event))
        raise TypeError(f"Unknown notification event: {type(event).__name__}")


class ThreadedNotificationPublisher(NotificationPublisher):

    def __init__(self, deliverer: NotificationDeliverer, max_workers: int = 4) -> None:
        self._deliverer = deliverer
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notify"
        )

    def publish(self, events: list[Notification]) -> None:
        for event in events:
            self._executor.submit(self._deliver_safely, event)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _deliver_safely(self, event: Notification) -> None:
        name = type(event).__name__
        order_id = getattr(event, "order_id", "?")
        try:
            result = self._deliverer.deliver(event)
        except Exception:
            logger.exception("%s for order %s raised; dropped", name, order_id)
            return
        if not result.success:
            logger.error("%s for order %s failed: %s", name, order_id, result.error)
        elif result.skipped:
            logger.info("%s for order %s skipped (not configured)", name, order_id)
        else:
            logger.info("%s for order %s delivered", name, order_id)
