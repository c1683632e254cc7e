"""Integration tests for the PlaceOrder use case.

Uses the in-memory unit of work; no database.
"""

from decimal import Decimal

import pytest

from storefront.application.dto import CustomerSpec, OrderItemSpec, PlaceOrderCommand
from storefront.application.notifications import (
    AdminOrderEmail,
    AdminOrderWhatsApp,
    CustomerOrderWhatsApp,
    OrderConfirmationEmail,
)
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import StorageError, ValidationError
from storefront.domain.model.order import PaymentMethod
from storefront.domain.model.product import StockPolicy
from tests.fakes import (
    ExplodingPublisher,
    FakeUnitOfWork,
    RecordingPublisher,
    make_product,
)


def _setup(
    policy: StockPolicy = StockPolicy.CLAMP,
    publisher=None,
) -> tuple[PlaceOrderHandler, FakeUnitOfWork, RecordingPublisher]:
    uow = FakeUnitOfWork([
        make_product(),
        make_product(id="prod-2", name="Adidas Superstar", brand="Adidas",
                     price="90", sizes={"36": 4, "37": 6, "38": 5}),
    ])
    publisher = publisher or RecordingPublisher()
    handler = PlaceOrderHandler(uow, publisher, stock_policy=policy)
    return handler, uow, publisher


def _command(
    items: list[OrderItemSpec] | None = None,
    order_id: str = "order-1",
    email: str = "ana@example.com",
    phone: str | None = "5512345678",
    total="240",
    payment_method: str = "cash",
) -> PlaceOrderCommand:
    return PlaceOrderCommand(
        id=order_id,
        items=items if items is not None else [OrderItemSpec("prod-1", 2, "38")],
        customer=CustomerSpec(
            full_name="Ana López",
            email=email,
            phone=phone,
            line="Línea 1",
            station="Insurgentes",
        ),
        total=total,
        payment_method=payment_method,
    )


class TestPlaceOrderHappyPath:

    def test_returns_order_with_lines(self):
        handler, _, _ = _setup()
        dto = handler.handle(_command())

        assert dto.id == "order-1"
        assert dto.total == Decimal("240")
        assert dto.status == "pending"
        assert dto.payment_method == "cash"
        assert len(dto.items) == 1
        line = dto.items[0]
        assert (line.product_id, line.size, line.quantity) == ("prod-1", "38", 2)
        assert line.price_at_purchase == Decimal("120")

    def test_decrements_stock_of_requested_size(self):
        handler, uow, _ = _setup()
        handler.handle(_command())
        assert uow.products.stock_of("prod-1", "38") == 6
        assert uow.products.stock_of("prod-1", "37") == 3

    def test_lines_carry_catalog_name_and_brand(self):
        handler, _, _ = _setup()
        line = handler.handle(_command()).items[0]
        assert line.product_name == "Air Jordan 1 Retro"
        assert line.brand == "Nike"

    def test_delivery_fields_kept(self):
        handler, _, _ = _setup()
        dto = handler.handle(_command())
        assert dto.line == "Línea 1"
        assert dto.station == "Insurgentes"
        assert dto.address is None

    def test_persisted_once(self):
        handler, uow, _ = _setup()
        handler.handle(_command())
        assert uow.commits == 1
        assert uow.orders.get_by_id("order-1") is not None

    def test_multiple_lines_in_request_order(self):
        handler, uow, _ = _setup()
        dto = handler.handle(_command(items=[
            OrderItemSpec("prod-2", 1, "37"),
            OrderItemSpec("prod-1", 1, "36"),
        ], total="210"))
        assert [i.product_id for i in dto.items] == ["prod-2", "prod-1"]
        assert uow.products.stock_of("prod-2", "37") == 5
        assert uow.products.stock_of("prod-1", "36") == 4

    def test_same_product_twice_decrements_twice(self):
        handler, uow, _ = _setup()
        handler.handle(_command(items=[
            OrderItemSpec("prod-1", 2, "38"),
            OrderItemSpec("prod-1", 3, "38"),
        ], total="600"))
        assert uow.products.stock_of("prod-1", "38") == 3


class TestPriceAtPurchase:

    def test_client_price_is_never_used(self):
        # The command has no price field at all: the line price comes from
        # the catalog even when the declared total is absurd.
        handler, _, _ = _setup()
        dto = handler.handle(_command(total="1"))
        assert dto.items[0].price_at_purchase == Decimal("120")
        assert dto.total == Decimal("1")

    def test_later_price_change_does_not_touch_order(self):
        handler, uow, _ = _setup()
        handler.handle(_command())

        with uow:
            product = uow.products.get_by_id("prod-1")
            product.update(price=product.price * 2)
            uow.products.save(product)
            uow.commit()

        line = uow.orders.get_by_id("order-1").lines[0]
        assert line.price_at_purchase.amount == Decimal("120")


class TestStockPolicies:

    def test_clamp_floors_at_zero(self):
        handler, uow, _ = _setup(StockPolicy.CLAMP)
        handler.handle(_command(items=[OrderItemSpec("prod-1", 5, "39")], total="600"))
        assert uow.products.stock_of("prod-1", "39") == 0

    def test_reject_fails_and_leaves_stock(self):
        handler, uow, _ = _setup(StockPolicy.REJECT)
        with pytest.raises(ValidationError, match="Insufficient stock"):
            handler.handle(_command(items=[OrderItemSpec("prod-1", 5, "39")], total="600"))
        assert uow.products.stock_of("prod-1", "39") == 2
        assert uow.orders.get_by_id("order-1") is None


class TestAtomicity:

    def test_unknown_product_rolls_back_earlier_lines(self):
        handler, uow, publisher = _setup()
        with pytest.raises(ValidationError, match="Product not found: 'ghost'"):
            handler.handle(_command(items=[
                OrderItemSpec("prod-1", 2, "38"),
                OrderItemSpec("ghost", 1, "38"),
            ]))
        assert uow.products.stock_of("prod-1", "38") == 8
        assert uow.orders.get_by_id("order-1") is None
        assert publisher.events == []

    def test_unknown_size_rolls_back(self):
        handler, uow, _ = _setup()
        with pytest.raises(ValidationError, match="Size 44 not available"):
            handler.handle(_command(items=[
                OrderItemSpec("prod-1", 1, "38"),
                OrderItemSpec("prod-2", 1, "44"),
            ]))
        assert uow.products.stock_of("prod-1", "38") == 8

    def test_commit_failure_rolls_back(self):
        handler, uow, publisher = _setup()
        uow.fail_on_commit = True
        with pytest.raises(StorageError):
            handler.handle(_command())
        assert uow.products.stock_of("prod-1", "38") == 8
        assert uow.orders.list_all() == []
        assert publisher.events == []

    def test_duplicate_id_fails_without_second_decrement(self):
        handler, uow, _ = _setup()
        handler.handle(_command())
        with pytest.raises(StorageError):
            handler.handle(_command())
        assert uow.products.stock_of("prod-1", "38") == 6
        assert len(uow.orders.list_all()) == 1


class TestValidationHappensFirst:

    @pytest.mark.parametrize(
        "command, message",
        [
            (_command(order_id=""), "id is required"),
            (_command(items=[]), "at least one item"),
            (_command(items=[OrderItemSpec("prod-1", 0, "38")]), "must be positive"),
            (_command(email="nope"), "customer.email is not a valid email"),
            (_command(total="0"), "total must be greater than zero"),
            (_command(payment_method="barter"), "paymentMethod must be one of"),
        ],
    )
    def test_rejected_without_any_write(self, command, message):
        handler, uow, publisher = _setup()
        with pytest.raises(ValidationError, match=message):
            handler.handle(command)
        assert uow.products.stock_of("prod-1", "38") == 8
        assert uow.orders.list_all() == []
        assert uow.commits == 0
        assert publisher.events == []

    def test_first_failing_field_wins(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError, match="Order must contain at least one item"):
            handler.handle(_command(items=[], email="nope", total="0"))

    def test_missing_customer(self):
        handler, _, _ = _setup()
        command = PlaceOrderCommand(
            id="order-1",
            items=[OrderItemSpec("prod-1", 1, "38")],
            customer=None,
            total="120",
            payment_method="cash",
        )
        with pytest.raises(ValidationError, match="customer is required"):
            handler.handle(command)

    def test_payment_method_outside_accepted_set(self):
        uow = FakeUnitOfWork([make_product()])
        handler = PlaceOrderHandler(
            uow, RecordingPublisher(),
            accepted_methods=frozenset({PaymentMethod.CASH}),
        )
        with pytest.raises(ValidationError, match="not accepted"):
            handler.handle(_command(payment_method="transfer"))


class TestNotifications:

    def test_events_after_commit(self):
        handler, _, publisher = _setup()
        handler.handle(_command())
        kinds = [type(e) for e in publisher.events]
        assert kinds == [
            OrderConfirmationEmail,
            CustomerOrderWhatsApp,
            AdminOrderEmail,
            AdminOrderWhatsApp,
        ]

    def test_confirmation_lists_lines_with_names(self):
        handler, _, publisher = _setup()
        handler.handle(_command())
        email = publisher.events[0]
        assert email.recipient == "ana@example.com"
        assert email.items[0].name == "Air Jordan 1 Retro"
        assert email.items[0].quantity == 2

    def test_no_customer_whatsapp_without_phone(self):
        handler, _, publisher = _setup()
        handler.handle(_command(phone=None))
        assert not any(isinstance(e, CustomerOrderWhatsApp) for e in publisher.events)
        assert any(isinstance(e, AdminOrderWhatsApp) for e in publisher.events)

    def test_publisher_failure_does_not_change_outcome(self):
        handler, uow, _ = _setup(publisher=ExplodingPublisher())
        dto = handler.handle(_command())
        assert dto.id == "order-1"
        assert uow.products.stock_of("prod-1", "38") == 6
