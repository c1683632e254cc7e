"""Unit tests for the Order aggregate and its placement rules."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import (
    Customer,
    Order,
    PaymentMethod,
    PaymentStatus,
    RequestedItem,
)
from storefront.domain.model.value_objects import Money
from tests.fakes import make_product


def _customer() -> Customer:
    return Customer.create("Ana López", "ana@example.com", "5512345678")


def _items() -> list[RequestedItem]:
    return [RequestedItem.create("prod-1", 2, "38")]


def _order(**overrides) -> Order:
    args = dict(
        id="order-1",
        customer=_customer(),
        items=_items(),
        total="240",
        payment_method="cash",
    )
    args.update(overrides)
    return Order.create(**args)


class TestOrderCreation:

    def test_happy_path(self):
        order = _order()
        assert order.id == "order-1"
        assert order.total == Money.of("240")
        assert order.payment_method is PaymentMethod.CASH
        assert order.payment_status is PaymentStatus.PENDING
        assert order.lines == []

    def test_created_at_is_set_server_side(self):
        assert _order().created_at.tzinfo is not None

    def test_missing_id(self):
        with pytest.raises(ValidationError, match="id is required"):
            _order(id="  ")

    def test_no_items(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _order(items=[])

    def test_zero_total(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _order(total="0")

    def test_non_numeric_total(self):
        with pytest.raises(ValidationError, match="total must be a positive number"):
            _order(total="lots")

    def test_unknown_payment_method(self):
        with pytest.raises(ValidationError, match="paymentMethod must be one of"):
            _order(payment_method="bitcoin")

    def test_payment_method_not_accepted(self):
        with pytest.raises(ValidationError, match="'gateway' is not accepted"):
            _order(
                payment_method="gateway",
                accepted_methods=frozenset({PaymentMethod.CASH}),
            )

    def test_explicit_status(self):
        assert _order(payment_status="paid").payment_status is PaymentStatus.PAID

    def test_notes_are_stripped_of_markup(self):
        assert _order(notes="<b>ring twice</b>").notes == "ring twice"


class TestCustomer:

    def test_email_is_validated(self):
        with pytest.raises(ValidationError, match="customer.email is not a valid email"):
            Customer.create("Ana", "not-an-email")

    def test_name_required(self):
        with pytest.raises(ValidationError, match="customer.fullName is required"):
            Customer.create(" ", "ana@example.com")

    def test_blank_phone_means_none(self):
        assert Customer.create("Ana", "ana@example.com", "  ").phone is None

    def test_bad_phone_rejected(self):
        with pytest.raises(ValidationError, match="phone is not valid"):
            Customer.create("Ana", "ana@example.com", "call me maybe")


class TestRequestedItem:

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError, match="must be positive"):
            RequestedItem.create("prod-1", 0, "38")

    def test_size_required(self):
        with pytest.raises(ValidationError, match="items.size is required"):
            RequestedItem.create("prod-1", 1, "")


class TestOrderLines:

    def test_line_uses_catalog_price(self):
        order = _order()
        line = order.add_line(make_product(price="120"), _items()[0])
        assert line.price_at_purchase == Money.of("120")
        assert line.line_total == Money.of("240")
        assert order.lines_total.amount == Decimal("240")

    def test_total_mismatch_is_only_logged(self, caplog):
        order = _order(total="1")
        order.add_line(make_product(price="120"), _items()[0])
        order.warn_on_total_mismatch()
        assert "declares total" in caplog.text
