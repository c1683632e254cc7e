"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its lines. Lines are created once,
during placement, and never change afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from storefront.domain import validation
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity

logger = logging.getLogger(__name__)


class PaymentMethod(Enum):
    GATEWAY = "gateway"
    TRANSFER = "transfer"
    CASH = "cash"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


@dataclass(frozen=True)
class Customer:
    """Snapshot of who placed the order, frozen at placement time."""

    full_name: str
    email: str
    phone: str | None = None
    id: str | None = None

    @staticmethod
    def create(
        full_name: str,
        email: str,
        phone: str | None = None,
        id: str | None = None,
    ) -> Customer:
        return Customer(
            full_name=validation.required_text(full_name, "customer.fullName"),
            email=validation.email(email, "customer.email"),
            phone=validation.phone(phone),
            id=id or None,
        )


@dataclass(frozen=True)
class Delivery:
    """Where to hand over the order. Every field is optional."""

    line: str | None = None
    station: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class RequestedItem:
    """One line as asked for by the caller, before touching the catalog."""

    product_id: str
    quantity: Quantity
    size: str

    @staticmethod
    def create(product_id: str, quantity: int, size: str) -> RequestedItem:
        return RequestedItem(
            product_id=validation.required_text(product_id, "items.productId"),
            quantity=Quantity(quantity),
            size=validation.required_text(size, "items.size"),
        )


@dataclass
class OrderLine:
    """A purchased product/size with the price captured at order time."""

    order_id: str
    product_id: str
    quantity: Quantity
    size: str
    price_at_purchase: Money  # locked at placement time
    id: int | None = None
    # Joined from the catalog on read, never persisted on the line.
    product_name: str | None = None
    product_brand: str | None = None

    @property
    def line_total(self) -> Money:
        return self.price_at_purchase * self.quantity.value


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders — it enforces every request rule
    before anything is written.  The ``__init__`` is intentionally simple so
    the repository can reconstitute persisted orders without re-validating.
    """

    id: str
    customer: Customer
    total: Money
    payment_method: PaymentMethod
    delivery: Delivery = field(default_factory=Delivery)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    notes: str = ""
    created_at: datetime = field(default_factory=_now)
    lines: list[OrderLine] = field(default_factory=list)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        id: str,
        customer: Customer,
        items: list[RequestedItem],
        total: str | int | float | Decimal,
        payment_method: str,
        accepted_methods: frozenset[PaymentMethod] | None = None,
        delivery: Delivery | None = None,
        payment_status: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Validate a placement request and return an order without lines."""
        if not id or not isinstance(id, str) or not id.strip():
            raise ValidationError("id is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        try:
            money = Money.of(total)
        except ValidationError:
            raise ValidationError("total must be a positive number") from None
        if money.amount <= 0:
            raise ValidationError("total must be greater than zero")

        method = _parse_enum(PaymentMethod, payment_method, "paymentMethod")
        if accepted_methods is not None and method not in accepted_methods:
            raise ValidationError(f"paymentMethod '{method.value}' is not accepted")

        status = (
            _parse_enum(PaymentStatus, payment_status, "status")
            if payment_status
            else PaymentStatus.PENDING
        )

        return Order(
            id=id.strip(),
            customer=customer,
            total=money,
            payment_method=method,
            delivery=delivery or Delivery(),
            payment_status=status,
            notes=validation.clean_text(notes),
        )

    # --- Placement ------------------------------------------------------------

    def add_line(self, product: Product, item: RequestedItem) -> OrderLine:
        """Record a line priced from the catalog record, not from the caller."""
        line = OrderLine(
            order_id=self.id,
            product_id=product.id,
            quantity=item.quantity,
            size=item.size,
            price_at_purchase=product.price,
        )
        self.lines.append(line)
        return line

    # --- Computed properties --------------------------------------------------

    @property
    def lines_total(self) -> Money:
        result = Money(Decimal("0.00"), self.total.currency)
        for line in self.lines:
            result = result + line.line_total
        return result

    def warn_on_total_mismatch(self) -> None:
        """The declared total is trusted; a mismatch is only logged."""
        if self.lines and self.lines_total.amount != self.total.amount:
            logger.warning(
                "Order %s declares total %s but its lines add up to %s",
                self.id, self.total, self.lines_total,
            )


def _parse_enum(enum_cls, raw: str | None, field_name: str):
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"{field_name} must be one of: {allowed}"
        ) from None
