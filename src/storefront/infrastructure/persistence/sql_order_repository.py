"""SQL-backed implementation of OrderRepository."""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection, RowMapping

from storefront.domain.model.order import (
    Customer,
    Delivery,
    Order,
    OrderLine,
    PaymentMethod,
    PaymentStatus,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.errors import storage_errors
from storefront.infrastructure.persistence.sql_product_repository import as_utc
from storefront.infrastructure.persistence.tables import order_items, orders, products


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        # A taken ID surfaces as a storage failure, not as a duplicate.
        with storage_errors("insert order"):
            self._conn.execute(insert(orders).values(**self._to_row(order)))

    def add_line(self, line: OrderLine) -> None:
        with storage_errors("insert order line"):
            result = self._conn.execute(
                insert(order_items).values(
                    order_id=line.order_id,
                    product_id=line.product_id,
                    quantity=line.quantity.value,
                    size=line.size,
                    price_at_purchase=line.price_at_purchase.amount,
                    currency=line.price_at_purchase.currency,
                )
            )
        line.id = result.inserted_primary_key[0]

    def get_by_id(self, order_id: str) -> Order | None:
        with storage_errors("load order"):
            row = self._conn.execute(
                select(orders).where(orders.c.id == order_id)
            ).mappings().first()
        if row is None:
            return None
        order = self._to_domain(row)
        order.lines = self._lines_for([order_id])[order_id]
        return order

    def list_all(self) -> list[Order]:
        with storage_errors("list orders"):
            rows = self._conn.execute(
                select(orders).order_by(orders.c.created_at.desc(), orders.c.id)
            ).mappings().all()
        result = [self._to_domain(row) for row in rows]
        lines = self._lines_for([o.id for o in result])
        for order in result:
            order.lines = lines[order.id]
        return result

    # --- Queries --------------------------------------------------------------

    def _lines_for(self, order_ids: list[str]) -> dict[str, list[OrderLine]]:
        grouped: dict[str, list[OrderLine]] = defaultdict(list)
        if not order_ids:
            return grouped
        query = (
            select(
                order_items,
                products.c.name.label("product_name"),
                products.c.brand.label("product_brand"),
            )
            .select_from(
                order_items.outerjoin(products, order_items.c.product_id == products.c.id)
            )
            .where(order_items.c.order_id.in_(order_ids))
            .order_by(order_items.c.id)
        )
        with storage_errors("load order lines"):
            rows = self._conn.execute(query).mappings().all()
        for row in rows:
            grouped[row["order_id"]].append(self._line_to_domain(row))
        return grouped

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer.id,
            "customer_name": order.customer.full_name,
            "customer_email": order.customer.email,
            "customer_phone": order.customer.phone,
            "delivery_line": order.delivery.line,
            "delivery_station": order.delivery.station,
            "delivery_address": order.delivery.address,
            "total": order.total.amount,
            "currency": order.total.currency,
            "payment_method": order.payment_method.value,
            "status": order.payment_status.value,
            "notes": order.notes,
            "created_at": order.created_at,
        }

    @staticmethod
    def _to_domain(row: RowMapping) -> Order:
        return Order(
            id=row["id"],
            customer=Customer(
                full_name=row["customer_name"],
                email=row["customer_email"],
                phone=row["customer_phone"],
                id=row["customer_id"],
            ),
            delivery=Delivery(
                line=row["delivery_line"],
                station=row["delivery_station"],
                address=row["delivery_address"],
            ),
            total=Money(Decimal(row["total"]), row["currency"]),
            payment_method=PaymentMethod(row["payment_method"]),
            payment_status=PaymentStatus(row["status"]),
            notes=row["notes"] or "",
            created_at=as_utc(row["created_at"]),
        )

    @staticmethod
    def _line_to_domain(row: RowMapping) -> OrderLine:
        return OrderLine(
            id=row["id"],
            order_id=row["order_id"],
            product_id=row["product_id"],
            quantity=Quantity(row["quantity"]),
            size=row["size"],
            price_at_purchase=Money(Decimal(row["price_at_purchase"]), row["currency"]),
            product_name=row["product_name"],
            product_brand=row["product_brand"],
        )
