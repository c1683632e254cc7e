"""Outbound notification events raised after an order is committed.

Handlers never talk to email or messaging services directly: they describe
what should be sent as event objects and hand them to a
``NotificationPublisher``.  Delivery is best effort and at most once; a
publisher must never let a delivery failure reach the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from storefront.application.dto import OrderDTO


@dataclass(frozen=True)
class NotificationLine:
    name: str
    size: str
    quantity: int
    price_at_purchase: Decimal


@dataclass(frozen=True)
class OrderConfirmationEmail:
    recipient: str
    customer_name: str
    order_id: str
    items: tuple[NotificationLine, ...]
    total: Decimal


@dataclass(frozen=True)
class AdminOrderEmail:
    order_id: str
    customer_name: str
    customer_phone: str | None
    total: Decimal


@dataclass(frozen=True)
class CustomerOrderWhatsApp:
    phone: str
    customer_name: str
    order_id: str
    total: Decimal


@dataclass(frozen=True)
class AdminOrderWhatsApp:
    order_id: str
    customer_name: str
    customer_phone: str | None
    total: Decimal


Notification = (
    OrderConfirmationEmail | AdminOrderEmail | CustomerOrderWhatsApp | AdminOrderWhatsApp
)


class NotificationPublisher(ABC):

    @abstractmethod
    def publish(self, events: list[Notification]) -> None:
        """Hand events off for delivery without waiting for the outcome."""


def order_placed_events(order: OrderDTO) -> list[Notification]:
    """Customer messages only when contact data is present; admin ones always."""
    events: list[Notification] = []
    if order.customer_email:
        events.append(
            OrderConfirmationEmail(
                recipient=order.customer_email,
                customer_name=order.customer_name,
                order_id=order.id,
                items=tuple(
                    NotificationLine(
                        name=item.product_name or "Product",
                        size=item.size,
                        quantity=item.quantity,
                        price_at_purchase=item.price_at_purchase,
                    )
                    for item in order.items
                ),
                total=order.total,
            )
        )
    if order.customer_phone:
        events.append(
            CustomerOrderWhatsApp(
                phone=order.customer_phone,
                customer_name=order.customer_name,
                order_id=order.id,
                total=order.total,
            )
        )
    events.append(
        AdminOrderEmail(
            order_id=order.id,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            total=order.total,
        )
    )
    events.append(
        AdminOrderWhatsApp(
            order_id=order.id,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            total=order.total,
        )
    )
    return events
