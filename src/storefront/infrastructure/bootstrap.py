"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  The HTTP app and the CLI
each build one ``Container`` and ask it for fresh units of work and shared
collaborators.
"""

from __future__ import annotations

import logging

from storefront.application.login import EnsureAdminHandler
from storefront.application.notifications import NotificationPublisher
from storefront.application.ports import PasswordHasher, PaymentGateway, TokenService
from storefront.infrastructure.config import Settings, load_settings
from storefront.infrastructure.notifications.dispatcher import (
    NotificationDeliverer,
    ThreadedNotificationPublisher,
)
from storefront.infrastructure.notifications.smtp_email_sender import SmtpEmailSender
from storefront.infrastructure.notifications.whatsapp_sender import (
    TwilioWhatsAppSender,
)
from storefront.infrastructure.payments.mercadopago_gateway import MercadoPagoGateway
from storefront.infrastructure.persistence.seed import seed_catalog
from storefront.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from storefront.infrastructure.persistence.tables import build_engine, create_schema
from storefront.infrastructure.security.passwords import BcryptPasswordHasher
from storefront.infrastructure.security.tokens import JwtTokenService

logger = logging.getLogger(__name__)


class Container:

    def __init__(
        self,
        settings: Settings | None = None,
        publisher: NotificationPublisher | None = None,
        payment_gateway: PaymentGateway | None = None,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.engine = build_engine(self.settings.database_url, self.settings.database_echo)
        self._publisher = publisher
        self._payment_gateway = payment_gateway
        self._password_hasher = password_hasher
        self._token_service: TokenService | None = None

    # --- Factories ------------------------------------------------------------

    def unit_of_work(self) -> SqlUnitOfWork:
        return SqlUnitOfWork(self.engine)

    def notification_publisher(self) -> NotificationPublisher:
        if self._publisher is None:
            s = self.settings
            deliverer = NotificationDeliverer(
                email_sender=SmtpEmailSender(
                    host=s.smtp_host,
                    port=s.smtp_port,
                    sender=s.sender_address,
                    user=s.smtp_user,
                    password=s.smtp_password,
                    use_tls=s.smtp_use_tls,
                ),
                messaging_sender=TwilioWhatsAppSender(
                    account_sid=s.twilio_account_sid,
                    auth_token=s.twilio_auth_token,
                    from_number=s.twilio_whatsapp_number,
                ),
                admin_email=s.admin_email,
                admin_phone=s.admin_phone,
                contact_whatsapp=s.contact_whatsapp,
            )
            self._publisher = ThreadedNotificationPublisher(
                deliverer, max_workers=s.notification_workers
            )
        return self._publisher

    def password_hasher(self) -> PasswordHasher:
        if self._password_hasher is None:
            self._password_hasher = BcryptPasswordHasher()
        return self._password_hasher

    def token_service(self) -> TokenService:
        if self._token_service is None:
            self._token_service = JwtTokenService(
                self.settings.jwt_secret, self.settings.jwt_expiry_hours
            )
        return self._token_service

    def payment_gateway(self) -> PaymentGateway:
        if self._payment_gateway is None:
            s = self.settings
            self._payment_gateway = MercadoPagoGateway(
                access_token=s.mercadopago_access_token,
                success_url=s.payment_success_url,
                failure_url=s.payment_failure_url,
                pending_url=s.payment_pending_url,
            )
        return self._payment_gateway

    # --- Lifecycle ------------------------------------------------------------

    def init_database(self, seed: bool = True) -> int:
        """Create tables, the admin account and (optionally) sample data."""
        create_schema(self.engine)
        s = self.settings
        if s.admin_password:
            EnsureAdminHandler(self.unit_of_work(), self.password_hasher()).handle(
                name=s.admin_name, email=s.admin_email, password=s.admin_password
            )
        else:
            logger.warning("admin_password not set; no admin account created")
        return seed_catalog(self.unit_of_work()) if seed else 0

    def close(self) -> None:
        if isinstance(self._publisher, ThreadedNotificationPublisher):
            self._publisher.shutdown(wait=True)
        self.engine.dispose()
