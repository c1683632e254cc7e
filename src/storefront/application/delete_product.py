"""Application service: Delete Product use case."""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> None:
        with self._uow:
            if not self._uow.products.delete(product_id):
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            self._uow.commit()
        logger.info("Product %s deleted", product_id)
