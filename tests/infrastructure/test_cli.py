"""Tests for the click command line, run against a seeded SQLite file."""

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli


@pytest.fixture
def run(container):
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, list(args), obj=container)

    return invoke


class TestProductCommands:

    def test_list(self, run):
        result = run("product", "list")
        assert result.exit_code == 0, result.output
        assert "prod-1" in result.output
        assert "Air Jordan 1 Retro" in result.output

    def test_list_featured_only(self, run):
        result = run("product", "list", "--featured")
        assert "prod-3" not in result.output

    def test_show(self, run):
        result = run("product", "show", "--id", "prod-1")
        assert result.exit_code == 0
        assert "$120.00 (was $180.00)" in result.output

    def test_show_unknown(self, run):
        result = run("product", "show", "--id", "prod-404")
        assert result.exit_code != 0
        assert "Product with ID 'prod-404' not found" in result.output

    def test_add(self, run):
        result = run(
            "product", "add",
            "--id", "prod-4", "--name", "New Balance 550", "--brand", "New Balance",
            "--price", "110.50", "--description", "Retro court sneaker in leather",
            "--category", "tenis", "--size", "38:3", "--size", "39:1",
        )
        assert result.exit_code == 0, result.output
        assert "Product prod-4 'New Balance 550' added at $110.50" in result.output

    def test_add_bad_size_format(self, run):
        result = run(
            "product", "add",
            "--id", "prod-4", "--name", "New Balance 550", "--brand", "New Balance",
            "--price", "110.50", "--description", "Retro court sneaker in leather",
            "--category", "tenis", "--size", "38",
        )
        assert result.exit_code != 0
        assert "Expected 'Size:Stock'" in result.output

    def test_update_price(self, run):
        result = run("product", "update-price", "--id", "prod-2", "--price", "95")
        assert "price updated to $95.00" in result.output

    def test_set_stock(self, run, container):
        result = run("product", "set-stock", "--id", "prod-1", "--size", "38", "--stock", "0")
        assert "size 38 stock set to 0" in result.output
        with container.unit_of_work() as uow:
            assert uow.products.get_by_id("prod-1").find_size("38").stock == 0

    def test_delete(self, run):
        assert run("product", "delete", "--id", "prod-3").exit_code == 0
        assert "prod-3" not in run("product", "list").output


class TestCategoryCommands:

    def test_add_list_delete(self, run):
        added = run("category", "add", "--name", "Botas", "--slug", "botas")
        assert added.exit_code == 0, added.output
        assert "botas" in run("category", "list").output
        duplicate = run("category", "add", "--name", "Botas", "--slug", "botas")
        assert "already exists" in duplicate.output
        assert run("category", "delete", "--id", "2").exit_code == 0


class TestOrderCommands:

    def test_place_show_list(self, run):
        placed = run(
            "order", "place", "--id", "order-1", "--name", "Ana López",
            "--email", "ana@example.com", "--items", "prod-1:38:2", "--total", "240",
        )
        assert placed.exit_code == 0, placed.output
        assert "Order #order-1 placed" in placed.output
        assert "Air Jordan 1 Retro" in placed.output

        shown = run("order", "show", "--id", "order-1")
        assert "Ana López <ana@example.com>" in shown.output
        assert "order-1" in run("order", "list").output

    def test_place_unknown_product(self, run):
        result = run(
            "order", "place", "--id", "order-1", "--name", "Ana",
            "--email", "ana@example.com", "--items", "ghost:38:1", "--total", "10",
        )
        assert result.exit_code != 0
        assert "Product not found: 'ghost'" in result.output

    def test_bad_item_format(self, run):
        result = run(
            "order", "place", "--id", "order-1", "--name", "Ana",
            "--email", "ana@example.com", "--items", "prod-1:2", "--total", "10",
        )
        assert result.exit_code != 0
        assert "ProductId:Size:Quantity" in result.output

    def test_empty_list(self, run):
        assert "No orders found." in run("order", "list").output


class TestDbCommands:

    def test_init_is_idempotent(self, run):
        result = run("db", "init")
        assert result.exit_code == 0
        assert "Database ready." in result.output
        assert "sample products" not in result.output
