"""Abstract repository for Category aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.category import Category


class CategoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, category_id: int) -> Category | None:
        """Return a category by its ID, or None."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Category | None:
        """Return a category by its slug, or None."""

    @abstractmethod
    def list_all(self) -> list[Category]:
        """Return every category ordered by name."""

    @abstractmethod
    def add(self, category: Category) -> None:
        """Insert a category and assign its ID."""

    @abstractmethod
    def save(self, category: Category) -> None:
        """Persist changes to an existing category."""

    @abstractmethod
    def delete(self, category_id: int) -> bool:
        """Remove a category; return False when it did not exist."""
