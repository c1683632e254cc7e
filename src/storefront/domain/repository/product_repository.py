"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_for_update(self, product_id: str) -> Product | None:
        """Like ``get_by_id`` but locks the row for the current transaction."""

    @abstractmethod
    def list_all(
        self,
        category: str | None = None,
        featured: bool | None = None,
    ) -> list[Product]:
        """Return catalog products, optionally filtered."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Insert a new product. Raises DuplicateEntityError on a taken ID."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist changes to an existing product."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product; return False when it did not exist."""
