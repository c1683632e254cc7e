"""Unit tests for the StockAllocationService domain service."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Customer, Order, RequestedItem
from storefront.domain.model.product import StockPolicy
from storefront.domain.service.stock_allocation_service import StockAllocationService
from tests.fakes import FakeProductRepository, make_product


def _order() -> Order:
    return Order.create(
        id="order-1",
        customer=Customer.create("Ana", "ana@example.com"),
        items=[RequestedItem.create("prod-1", 1, "38")],
        total="120",
        payment_method="cash",
    )


class TestAllocate:

    def test_decrements_and_prices_line(self):
        repo = FakeProductRepository([make_product(price="120")])
        service = StockAllocationService(repo)
        order = _order()

        product, line = service.allocate(order, RequestedItem.create("prod-1", 2, "38"))

        assert product.find_size("38").stock == 6
        assert line.price_at_purchase.amount == 120
        assert order.lines == [line]

    def test_does_not_persist_by_itself(self):
        repo = FakeProductRepository([make_product()])
        StockAllocationService(repo).allocate(_order(), RequestedItem.create("prod-1", 2, "38"))
        assert repo.stock_of("prod-1", "38") == 8

    def test_unknown_product(self):
        service = StockAllocationService(FakeProductRepository())
        with pytest.raises(ValidationError, match="Product not found: 'ghost'"):
            service.allocate(_order(), RequestedItem.create("ghost", 1, "38"))

    def test_unknown_size(self):
        service = StockAllocationService(FakeProductRepository([make_product()]))
        with pytest.raises(ValidationError, match="Size 44 not available"):
            service.allocate(_order(), RequestedItem.create("prod-1", 1, "44"))

    def test_oversell_is_logged_under_clamp(self, caplog):
        repo = FakeProductRepository([make_product(sizes={"39": 2})])
        product, _ = StockAllocationService(repo, StockPolicy.CLAMP).allocate(
            _order(), RequestedItem.create("prod-1", 5, "39")
        )
        assert product.find_size("39").stock == 0
        assert "only 2 in stock" in caplog.text

    def test_oversell_rejected_under_reject(self):
        repo = FakeProductRepository([make_product(sizes={"39": 2})])
        service = StockAllocationService(repo, StockPolicy.REJECT)
        with pytest.raises(ValidationError, match="Insufficient stock"):
            service.allocate(_order(), RequestedItem.create("prod-1", 5, "39"))
