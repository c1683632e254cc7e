"""SQL-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection, RowMapping

from storefront.domain.model.product import Product, SizeStock
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.errors import storage_errors
from storefront.infrastructure.persistence.tables import products


class SqlProductRepository(ProductRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        with storage_errors("load product"):
            row = self._conn.execute(
                select(products).where(products.c.id == product_id)
            ).mappings().first()
        return self._to_domain(row) if row else None

    def get_for_update(self, product_id: str) -> Product | None:
        # FOR UPDATE is rendered as nothing on SQLite, where the order header
        # insert already holds the database write lock.
        with storage_errors("lock product"):
            row = self._conn.execute(
                select(products).where(products.c.id == product_id).with_for_update()
            ).mappings().first()
        return self._to_domain(row) if row else None

    def list_all(
        self,
        category: str | None = None,
        featured: bool | None = None,
    ) -> list[Product]:
        query = select(products).order_by(products.c.created_at, products.c.id)
        if category is not None:
            query = query.where(products.c.category == category)
        if featured is not None:
            query = query.where(products.c.featured == featured)
        with storage_errors("list products"):
            rows = self._conn.execute(query).mappings().all()
        return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> None:
        with storage_errors("add product", duplicate=f"Product '{product.id}' already exists"):
            self._conn.execute(insert(products).values(**self._to_row(product)))

    def save(self, product: Product) -> None:
        values = self._to_row(product)
        del values["id"], values["created_at"]
        with storage_errors("save product"):
            self._conn.execute(
                update(products).where(products.c.id == product.id).values(**values)
            )

    def delete(self, product_id: str) -> bool:
        with storage_errors("delete product"):
            result = self._conn.execute(delete(products).where(products.c.id == product_id))
        return result.rowcount > 0

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "brand": product.brand,
            "price": product.price.amount,
            "original_price": (
                product.original_price.amount if product.original_price else None
            ),
            "currency": product.price.currency,
            "images": list(product.images),
            "description": product.description,
            "sizes": [{"value": s.value, "stock": s.stock} for s in product.sizes],
            "category": product.category,
            "featured": product.featured,
            "created_at": product.created_at,
            "updated_at": product.updated_at,
        }

    @staticmethod
    def _to_domain(row: RowMapping) -> Product:
        currency = row["currency"]
        original = row["original_price"]
        return Product(
            id=row["id"],
            name=row["name"],
            brand=row["brand"],
            price=Money(Decimal(row["price"]), currency),
            original_price=Money(Decimal(original), currency) if original is not None else None,
            images=list(row["images"] or []),
            description=row["description"],
            sizes=[
                SizeStock(value=str(s["value"]), stock=int(s["stock"]))
                for s in row["sizes"] or []
            ],
            category=row["category"],
            featured=bool(row["featured"]),
            created_at=as_utc(row["created_at"]),
            updated_at=as_utc(row["updated_at"]),
        )


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
