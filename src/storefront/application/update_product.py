"""Application service: Update Product use cases (details, price, stock)."""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO, SizeSpec
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product, SizeStock
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

_MONEY_FIELDS = ("price", "original_price")


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, **changes) -> ProductDTO:
        """Apply a partial update.

        Price changes do NOT affect any existing orders — their lines
        captured the price at purchase time.
        """
        converted = dict(changes)
        for name in _MONEY_FIELDS:
            if name in converted and converted[name] is not None:
                converted[name] = Money.price(converted[name])
        if "price" in converted and converted["price"] is None:
            del converted["price"]
        if "sizes" in converted and converted["sizes"] is not None:
            converted["sizes"] = [
                SizeStock(value=s.value, stock=s.stock) for s in converted["sizes"]
            ]

        with self._uow:
            product = self._load(product_id)
            product.update(**converted)
            self._uow.products.save(product)
            self._uow.commit()

        logger.info("Product %s updated (%s)", product_id, ", ".join(sorted(changes)))
        return ProductDTO.from_domain(product)

    def set_stock(self, product_id: str, size: SizeSpec) -> ProductDTO:
        """Set the stock count of one size, adding the size if new."""
        with self._uow:
            product = self._load(product_id)
            product.set_stock(size.value, size.stock)
            self._uow.products.save(product)
            self._uow.commit()

        logger.info("Product %s size %s stock set to %d", product_id, size.value, size.stock)
        return ProductDTO.from_domain(product)

    def _load(self, product_id: str) -> Product:
        product = self._uow.products.get_for_update(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product
