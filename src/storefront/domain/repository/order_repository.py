"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderLine


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert the order header. A taken ID is a storage failure."""

    @abstractmethod
    def add_line(self, line: OrderLine) -> None:
        """Insert one order line and assign its ID."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its lines joined to product name/brand."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first, with lines."""
