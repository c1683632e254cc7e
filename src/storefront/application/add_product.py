"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO, ProductSpec
from storefront.domain.exceptions import DuplicateEntityError
from storefront.domain.model.product import Product, SizeStock
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, spec: ProductSpec) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product.create(
            id=spec.id,
            name=spec.name,
            brand=spec.brand,
            price=Money.price(spec.price),
            description=spec.description,
            sizes=[SizeStock(value=s.value, stock=s.stock) for s in spec.sizes],
            category=spec.category,
            images=list(spec.images),
            original_price=(
                Money.price(spec.original_price)
                if spec.original_price is not None
                else None
            ),
            featured=spec.featured,
        )

        with self._uow:
            if self._uow.products.get_by_id(product.id) is not None:
                raise DuplicateEntityError(f"Product '{product.id}' already exists")
            self._uow.products.add(product)
            self._uow.commit()

        logger.info("Product %s '%s' added at %s", product.id, product.name, product.price)
        return ProductDTO.from_domain(product)
