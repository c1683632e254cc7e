"""SQL-backed implementation of CategoryRepository."""

from __future__ import annotations

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection, RowMapping

from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.infrastructure.persistence.errors import storage_errors
from storefront.infrastructure.persistence.tables import categories


class SqlCategoryRepository(CategoryRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def get_by_id(self, category_id: int) -> Category | None:
        return self._first(select(categories).where(categories.c.id == category_id))

    def get_by_slug(self, slug: str) -> Category | None:
        return self._first(select(categories).where(categories.c.slug == slug))

    def list_all(self) -> list[Category]:
        with storage_errors("list categories"):
            rows = self._conn.execute(
                select(categories).order_by(categories.c.name)
            ).mappings().all()
        return [self._to_domain(row) for row in rows]

    def add(self, category: Category) -> None:
        with storage_errors(
            "add category", duplicate=f"Category slug '{category.slug}' already exists"
        ):
            result = self._conn.execute(
                insert(categories).values(name=category.name, slug=category.slug)
            )
        category.id = result.inserted_primary_key[0]

    def save(self, category: Category) -> None:
        with storage_errors(
            "save category", duplicate=f"Category slug '{category.slug}' already exists"
        ):
            self._conn.execute(
                update(categories)
                .where(categories.c.id == category.id)
                .values(name=category.name, slug=category.slug)
            )

    def delete(self, category_id: int) -> bool:
        with storage_errors("delete category"):
            result = self._conn.execute(
                delete(categories).where(categories.c.id == category_id)
            )
        return result.rowcount > 0

    def _first(self, query) -> Category | None:
        with storage_errors("load category"):
            row = self._conn.execute(query).mappings().first()
        return self._to_domain(row) if row else None

    @staticmethod
    def _to_domain(row: RowMapping) -> Category:
        return Category(id=row["id"], name=row["name"], slug=row["slug"])
