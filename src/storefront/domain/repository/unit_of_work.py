"""Abstract unit of work — one store transaction spanning several repositories.

Usage::

    with uow:
        uow.orders.add(order)
        uow.products.save(product)
        uow.commit()

Leaving the block without ``commit()`` (normally, or through an exception)
rolls everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    products: ProductRepository
    categories: CategoryRepository
    orders: OrderRepository
    users: UserRepository

    def __enter__(self) -> UnitOfWork:
        self._committed = False
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if not self._committed:
                self.rollback()
        finally:
            self._end()

    def commit(self) -> None:
        self._commit()
        self._committed = True

    @abstractmethod
    def rollback(self) -> None:
        """Undo everything done since the block was entered."""

    @abstractmethod
    def _begin(self) -> None:
        """Open the transaction and bind the repositories to it."""

    @abstractmethod
    def _commit(self) -> None:
        """Make the transaction's writes durable."""

    def _end(self) -> None:
        """Release resources held by the transaction."""
