"""Application service: catalog queries."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        category: str | None = None,
        featured: bool | None = None,
    ) -> list[ProductDTO]:
        with self._uow:
            products = self._uow.products.list_all(category=category, featured=featured)
        return [ProductDTO.from_domain(p) for p in products]


class ShowProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> ProductDTO:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return ProductDTO.from_domain(product)
