"""SQL repositories and transaction behaviour against a real SQLite file."""

import threading
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from storefront.application.dto import CustomerSpec, OrderItemSpec, PlaceOrderCommand
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import DuplicateEntityError, StorageError, ValidationError
from storefront.domain.model.product import StockPolicy
from storefront.infrastructure.persistence.tables import order_items, orders
from tests.fakes import RecordingPublisher, make_product


def _stock(container, product_id: str, size: str) -> int:
    with container.unit_of_work() as uow:
        return uow.products.get_by_id(product_id).find_size(size).stock


def _count(container, table) -> int:
    with container.engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(table)).scalar_one()


def _command(order_id: str = "order-1", items=None, total="240") -> PlaceOrderCommand:
    return PlaceOrderCommand(
        id=order_id,
        items=items or [OrderItemSpec("prod-1", 2, "38")],
        customer=CustomerSpec(full_name="Ana López", email="ana@example.com", phone="5512345678"),
        total=total,
        payment_method="cash",
    )


def _handler(container, policy=StockPolicy.CLAMP) -> PlaceOrderHandler:
    return PlaceOrderHandler(container.unit_of_work(), RecordingPublisher(), stock_policy=policy)


class TestSeedData:

    def test_sample_catalog(self, container):
        with container.unit_of_work() as uow:
            ids = [p.id for p in uow.products.list_all()]
            featured = [p.id for p in uow.products.list_all(featured=True)]
        assert ids == ["prod-1", "prod-2", "prod-3"]
        assert featured == ["prod-1", "prod-2"]
        assert _stock(container, "prod-1", "38") == 8

    def test_seed_is_idempotent(self, container):
        assert container.init_database(seed=True) == 0


class TestProductRepository:

    def test_round_trip(self, container):
        with container.unit_of_work() as uow:
            product = uow.products.get_by_id("prod-1")
        assert product.price.amount == Decimal("120")
        assert product.original_price.amount == Decimal("180")
        assert [s.value for s in product.sizes] == ["36", "37", "38", "39"]
        assert product.created_at.tzinfo is not None

    def test_duplicate_insert(self, container):
        with pytest.raises(DuplicateEntityError, match="already exists"):
            with container.unit_of_work() as uow:
                uow.products.add(make_product(id="prod-1"))

    def test_uncommitted_changes_are_discarded(self, container):
        with container.unit_of_work() as uow:
            product = uow.products.get_for_update("prod-1")
            product.set_stock("38", 0)
            uow.products.save(product)
        assert _stock(container, "prod-1", "38") == 8


class TestPlaceOrderOnSqlite:

    def test_order_and_lines_persisted(self, container):
        dto = _handler(container).handle(_command())
        assert dto.items[0].product_name == "Air Jordan 1 Retro"
        assert dto.items[0].id is not None
        assert _stock(container, "prod-1", "38") == 6
        assert _count(container, orders) == 1
        assert _count(container, order_items) == 1

    def test_failure_mid_order_leaves_nothing(self, container):
        with pytest.raises(ValidationError):
            _handler(container).handle(_command(items=[
                OrderItemSpec("prod-1", 2, "38"),
                OrderItemSpec("prod-2", 1, "99"),
            ]))
        assert _stock(container, "prod-1", "38") == 8
        assert _count(container, orders) == 0
        assert _count(container, order_items) == 0

    def test_duplicate_order_id(self, container):
        _handler(container).handle(_command())
        with pytest.raises(StorageError):
            _handler(container).handle(_command())
        assert _stock(container, "prod-1", "38") == 6
        assert _count(container, order_items) == 1

    def test_lines_survive_product_deletion(self, container):
        _handler(container).handle(_command())
        with container.unit_of_work() as uow:
            uow.products.delete("prod-1")
            uow.commit()
        with container.unit_of_work() as uow:
            order = uow.orders.get_by_id("order-1")
        assert order.lines[0].product_id == "prod-1"
        assert order.lines[0].product_name is None
        assert order.lines[0].price_at_purchase.amount == Decimal("120")

    def test_list_newest_first(self, container):
        _handler(container).handle(_command("order-1"))
        _handler(container).handle(_command("order-2"))
        with container.unit_of_work() as uow:
            assert [o.id for o in uow.orders.list_all()] == ["order-2", "order-1"]


class TestConcurrentOrders:

    def _race(self, container, policy, commands):
        errors: list[Exception] = []
        barrier = threading.Barrier(len(commands))

        def place(command):
            barrier.wait()
            try:
                _handler(container, policy).handle(command)
            except Exception as exc:  # collected for the assertions below
                errors.append(exc)

        threads = [threading.Thread(target=place, args=(c,)) for c in commands]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)
        return errors

    def test_no_lost_decrement(self, container):
        commands = [
            _command(f"order-{n}", [OrderItemSpec("prod-1", 1, "38")], "120")
            for n in range(4)
        ]
        errors = self._race(container, StockPolicy.CLAMP, commands)
        assert errors == []
        assert _stock(container, "prod-1", "38") == 4
        assert _count(container, orders) == 4

    def test_reject_lets_only_one_through(self, container):
        commands = [
            _command(f"order-{n}", [OrderItemSpec("prod-1", 2, "39")], "240")
            for n in range(2)
        ]
        errors = self._race(container, StockPolicy.REJECT, commands)
        assert len(errors) == 1
        assert isinstance(errors[0], ValidationError)
        assert _stock(container, "prod-1", "39") == 0
        assert _count(container, orders) == 1
