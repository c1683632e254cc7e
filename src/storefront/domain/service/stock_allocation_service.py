"""Domain service: Stock Allocation.

Coordinates the cross-aggregate step of order placement: for one requested
item, look up the product, take the units out of the requested size and
price the order line from the catalog record.

The service mutates the product in memory only; persisting the line and the
product is up to the caller, inside the same unit of work.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, OrderLine, RequestedItem
from storefront.domain.model.product import Product, StockPolicy
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockAllocationService:

    def __init__(
        self,
        product_repo: ProductRepository,
        policy: StockPolicy = StockPolicy.CLAMP,
    ) -> None:
        self._product_repo = product_repo
        self._policy = policy

    def allocate(self, order: Order, item: RequestedItem) -> tuple[Product, OrderLine]:
        """Decrement stock for *item* and append its line to *order*.

        Raises ValidationError when the product or the size does not exist,
        or, under the ``REJECT`` policy, when stock is insufficient.
        """
        product = self._product_repo.get_for_update(item.product_id)
        if product is None:
            raise ValidationError(f"Product not found: '{item.product_id}'")

        size = product.find_size(item.size)
        if size is None:
            raise ValidationError(
                f"Size {item.size} not available for product {product.id}"
            )

        requested = item.quantity.value
        if requested > size.stock:
            logger.warning(
                "Order %s asks for %d of %s size %s but only %d in stock (policy=%s)",
                order.id, requested, product.id, item.size, size.stock,
                self._policy.value,
            )

        product.decrement_stock(item.size, requested, self._policy)
        line = order.add_line(product, item)
        return product, line
