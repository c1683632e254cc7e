"""Application service: Create Payment Preference use case.

Builds a checkout preference at the payment gateway for a set of items.
Unit prices come from the catalog, never from the request.  This is not
part of the order-write transaction.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderItemSpec, PaymentPreferenceDTO
from storefront.application.ports import PaymentGateway, PaymentItem
from storefront.domain import validation
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import RequestedItem
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CreatePaymentPreferenceHandler:

    def __init__(self, uow: UnitOfWork, gateway: PaymentGateway) -> None:
        self._uow = uow
        self._gateway = gateway

    def handle(
        self,
        order_id: str,
        items: list[OrderItemSpec],
        customer_name: str,
        customer_email: str,
    ) -> PaymentPreferenceDTO:
        order_id = validation.required_text(order_id, "orderId")
        if not items:
            raise ValidationError("Order must contain at least one item")
        requested = [
            RequestedItem.create(spec.product_id, spec.quantity, spec.size)
            for spec in items
        ]
        name = validation.required_text(customer_name, "customer.fullName")
        email = validation.email(customer_email, "customer.email")

        payment_items: list[PaymentItem] = []
        with self._uow:
            for item in requested:
                product = self._uow.products.get_by_id(item.product_id)
                if product is None:
                    raise ValidationError(f"Product not found: '{item.product_id}'")
                payment_items.append(
                    PaymentItem(
                        product_id=product.id,
                        title=f"{product.name} ({item.size})",
                        quantity=item.quantity.value,
                        unit_price=product.price.amount,
                        currency=product.price.currency,
                    )
                )

        preference_id, init_point = self._gateway.create_preference(
            order_id=order_id,
            items=payment_items,
            payer_name=name,
            payer_email=email,
        )
        logger.info("Payment preference %s created for order %s", preference_id, order_id)
        return PaymentPreferenceDTO(preference_id=preference_id, init_point=init_point)
