"""Outbound ports consumed by the application layer.

Like the repositories, these are abstract so handlers can be exercised with
fakes; the infrastructure layer supplies bcrypt, PyJWT, SMTP, Twilio and
MercadoPago implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SendResult:
    """Outcome of one outbound delivery attempt."""

    success: bool
    reference: str | None = None
    error: str | None = None
    skipped: bool = False


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash for *password*."""

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Check *password* against a stored hash."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    role: str


class TokenService(ABC):

    @abstractmethod
    def issue(self, claims: TokenClaims) -> str:
        """Sign a session token for *claims*."""

    @abstractmethod
    def verify(self, token: str) -> TokenClaims:
        """Decode *token*; raise AuthenticationError if invalid or expired."""


class EmailSender(ABC):

    @abstractmethod
    def send(self, recipient: str, subject: str, html: str) -> SendResult:
        """Deliver one rendered email."""


class MessagingSender(ABC):

    @abstractmethod
    def send(self, phone: str, body: str) -> SendResult:
        """Deliver one text message. Unconfigured senders succeed as no-ops."""


@dataclass(frozen=True)
class PaymentItem:
    product_id: str
    title: str
    quantity: int
    unit_price: Decimal
    currency: str


class PaymentGateway(ABC):

    @abstractmethod
    def create_preference(
        self,
        order_id: str,
        items: list[PaymentItem],
        payer_name: str,
        payer_email: str,
    ) -> tuple[str, str]:
        """Return ``(preference_id, redirect_url)``."""
