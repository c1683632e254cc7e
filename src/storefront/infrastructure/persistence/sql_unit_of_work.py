"""SQLAlchemy unit of work: one connection and one transaction per block."""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.errors import storage_errors
from storefront.infrastructure.persistence.sql_category_repository import (
    SqlCategoryRepository,
)
from storefront.infrastructure.persistence.sql_order_repository import (
    SqlOrderRepository,
)
from storefront.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)
from storefront.infrastructure.persistence.sql_user_repository import (
    SqlUserRepository,
)

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):
    """Not thread-safe: build one per request (see ``bootstrap``)."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection = None
        self._transaction = None

    def _begin(self) -> None:
        with storage_errors("open a database transaction"):
            self._connection = self._engine.connect()
            self._transaction = self._connection.begin()
        self.products = SqlProductRepository(self._connection)
        self.categories = SqlCategoryRepository(self._connection)
        self.orders = SqlOrderRepository(self._connection)
        self.users = SqlUserRepository(self._connection)

    def _commit(self) -> None:
        with storage_errors("commit"):
            self._transaction.commit()

    def rollback(self) -> None:
        if self._transaction is not None and self._transaction.is_active:
            with storage_errors("roll back"):
                self._transaction.rollback()
            logger.debug("Transaction rolled back")

    def _end(self) -> None:
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._transaction = None
