"""Unit tests for the Product aggregate and per-size stock."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, SizeStock, StockPolicy
from storefront.domain.model.value_objects import Money
from tests.fakes import make_product


def _create(**overrides) -> Product:
    args = dict(
        id="prod-9",
        name="Puma RS-X",
        brand="Puma",
        price=Money.price("85"),
        description="Modern and comfortable running sneakers",
        sizes=[SizeStock("38", 7)],
        category="tenis",
    )
    args.update(overrides)
    return Product.create(**args)


class TestProductCreation:

    def test_happy_path(self):
        product = _create()
        assert product.id == "prod-9"
        assert product.total_stock == 7
        assert product.featured is False

    def test_category_is_normalised_to_slug(self):
        assert _create(category="  Tenis ").category == "tenis"

    def test_needs_at_least_one_size(self):
        with pytest.raises(ValidationError, match="at least one size"):
            _create(sizes=[])

    def test_duplicate_size_labels_rejected(self):
        with pytest.raises(ValidationError, match="unique"):
            _create(sizes=[SizeStock("38", 1), SizeStock("38", 2)])

    def test_script_in_name_rejected(self):
        with pytest.raises(ValidationError, match="invalid characters"):
            _create(name="<script>alert(1)</script>")

    def test_short_description_rejected(self):
        with pytest.raises(ValidationError, match="at least 10"):
            _create(description="short")

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            SizeStock("38", -1)

    def test_relative_image_path_accepted(self):
        assert _create(images=["/img/rsx.jpg"]).images == ["/img/rsx.jpg"]


class TestDecrementStock:

    def test_decrements_requested_size_only(self):
        product = make_product()
        assert product.decrement_stock("38", 2, StockPolicy.CLAMP) == 6
        assert product.find_size("37").stock == 3

    def test_clamp_floors_at_zero(self):
        product = make_product(sizes={"39": 2})
        assert product.decrement_stock("39", 5, StockPolicy.CLAMP) == 0

    def test_reject_refuses_oversell(self):
        product = make_product(sizes={"39": 2})
        with pytest.raises(ValidationError, match="Insufficient stock"):
            product.decrement_stock("39", 5, StockPolicy.REJECT)
        assert product.find_size("39").stock == 2

    def test_reject_allows_exact_stock(self):
        product = make_product(sizes={"39": 2})
        assert product.decrement_stock("39", 2, StockPolicy.REJECT) == 0

    def test_unknown_size(self):
        product = make_product()
        with pytest.raises(ValidationError, match="Size 45 not available for product prod-1"):
            product.decrement_stock("45", 1, StockPolicy.CLAMP)

    def test_decrement_touches_updated_at(self):
        product = make_product()
        before = product.updated_at
        product.decrement_stock("38", 1, StockPolicy.CLAMP)
        assert product.updated_at >= before


class TestCatalogChanges:

    def test_set_stock_existing_size(self):
        product = make_product()
        product.set_stock("38", 20)
        assert product.find_size("38").stock == 20

    def test_set_stock_adds_new_size(self):
        product = make_product(sizes={"38": 1})
        product.set_stock("40", 4)
        assert [s.value for s in product.sizes] == ["38", "40"]

    def test_update_price_rejects_zero(self):
        product = make_product()
        with pytest.raises(ValidationError, match="greater than zero"):
            product.update_price(Money.of("0"))

    def test_partial_update(self):
        product = make_product()
        product.update(featured=True, brand="Jordan")
        assert product.featured is True
        assert product.brand == "Jordan"
        assert product.name == "Air Jordan 1 Retro"
