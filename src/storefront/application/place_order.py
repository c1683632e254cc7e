"""Application service: Place Order use case.

This is the write path that matters: it records an order against current
inventory atomically.

Steps:
1. Validate the whole request before touching the store.
2. In one unit of work: insert the header, then for every item (in the
   caller's order) allocate stock, insert the line priced from the catalog
   and persist the product's sizes.
3. Commit; any failure rolls back every insert and stock change.
4. Read the order back with product name/brand joined onto each line.
5. Publish notification events. Nothing that happens there can change the
   outcome returned to the caller.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, PlaceOrderCommand
from storefront.application.notifications import (
    NotificationPublisher,
    order_placed_events,
)
from storefront.domain.exceptions import (
    DomainException,
    StorageError,
    ValidationError,
)
from storefront.domain.model.order import (
    Customer,
    Delivery,
    Order,
    PaymentMethod,
    RequestedItem,
)
from storefront.domain.model.product import StockPolicy
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_allocation_service import (
    StockAllocationService,
)

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        publisher: NotificationPublisher,
        stock_policy: StockPolicy = StockPolicy.CLAMP,
        accepted_methods: frozenset[PaymentMethod] | None = None,
    ) -> None:
        self._uow = uow
        self._publisher = publisher
        self._stock_policy = stock_policy
        self._accepted_methods = accepted_methods

    def handle(self, command: PlaceOrderCommand) -> OrderDTO:
        order, items = self._validate(command)

        try:
            with self._uow:
                self._uow.orders.add(order)
                allocator = StockAllocationService(
                    self._uow.products, self._stock_policy
                )
                for item in items:
                    product, line = allocator.allocate(order, item)
                    self._uow.orders.add_line(line)
                    self._uow.products.save(product)
                self._uow.commit()
        except StorageError:
            logger.error("Order %s rolled back after a storage failure", order.id)
            raise
        except DomainException as exc:
            logger.info("Order %s rolled back: %s", order.id, exc)
            raise

        order.warn_on_total_mismatch()
        logger.info(
            "Order %s placed: %d line(s), total %s, payment %s",
            order.id, len(order.lines), order.total, order.payment_method.value,
        )

        dto = self._read_back(order)
        self._notify(dto)
        return dto

    # --- Steps ----------------------------------------------------------------

    def _validate(self, command: PlaceOrderCommand) -> tuple[Order, list[RequestedItem]]:
        # Same order as the request document: id, items, customer, total, method.
        if not command.id or not str(command.id).strip():
            raise ValidationError("id is required")
        if not command.items:
            raise ValidationError("Order must contain at least one item")
        items = [
            RequestedItem.create(spec.product_id, spec.quantity, spec.size)
            for spec in command.items
        ]
        spec = command.customer
        if spec is None:
            raise ValidationError("customer is required")
        customer = Customer.create(
            full_name=spec.full_name,
            email=spec.email,
            phone=spec.phone,
            id=spec.id,
        )
        order = Order.create(
            id=command.id,
            customer=customer,
            items=items,
            total=command.total,
            payment_method=command.payment_method,
            accepted_methods=self._accepted_methods,
            delivery=Delivery(line=spec.line, station=spec.station, address=spec.address),
            payment_status=command.status,
            notes=command.notes,
        )
        return order, items

    def _read_back(self, order: Order) -> OrderDTO:
        """Fetch the committed order with catalog data joined on each line.

        Runs outside the write transaction; if the read itself fails the
        order is still committed, so fall back to what we already hold.
        """
        try:
            with self._uow:
                persisted = self._uow.orders.get_by_id(order.id)
        except StorageError:
            logger.exception("Could not read back order %s", order.id)
            persisted = None
        return OrderDTO.from_domain(persisted or order)

    def _notify(self, dto: OrderDTO) -> None:
        try:
            self._publisher.publish(order_placed_events(dto))
        except Exception:
            logger.exception("Could not publish notifications for order %s", dto.id)
