"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductDTO, ProductSpec, SizeSpec
from storefront.application.show_product import ListProductsHandler, ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


def _parse_size(raw: str) -> SizeSpec:
    """Parse '38:8' into a SizeSpec."""
    if ":" not in raw:
        raise click.BadParameter(f"Invalid size format '{raw}'. Expected 'Size:Stock'.")
    value, stock_str = raw.rsplit(":", 1)
    try:
        stock = int(stock_str)
    except ValueError:
        raise click.BadParameter(f"Invalid stock '{stock_str}' for size '{value}'.")
    return SizeSpec(value=value.strip(), stock=stock)


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}  {dto.brand} {dto.name}")
    click.echo(f"Category: {dto.category}   Featured: {'yes' if dto.featured else 'no'}")
    price = f"${dto.price:.2f}"
    if dto.original_price is not None:
        price += f" (was ${dto.original_price:.2f})"
    click.echo(f"Price:    {price}")
    click.echo(f"Updated:  {dto.updated_at}")
    click.echo()
    click.echo(f"  {'Size':<8} {'Stock':>6}")
    click.echo(f"  {'-'*15}")
    for size in dto.sizes:
        click.echo(f"  {size.value:<8} {size.stock:>6}")


@click.command("list")
@click.option("--category", default=None, help="Only products in this category slug.")
@click.option("--featured", is_flag=True, default=False, help="Only featured products.")
@click.pass_obj
def product_list(container: Container, category: str | None, featured: bool) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(container.unit_of_work())
    products = handler.handle(category=category, featured=True if featured else None)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<28} {'Brand':<12} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 72)
    for p in products:
        stock = sum(s.stock for s in p.sizes)
        click.echo(f"{p.id:<12} {p.name:<28} {p.brand:<12} {p.price:>10.2f} {stock:>6}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(container: Container, product_id: str) -> None:
    """Show one product with per-size stock."""
    try:
        dto = ShowProductHandler(container.unit_of_work()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID (e.g. prod-4).")
@click.option("--name", required=True, help="Product name.")
@click.option("--brand", required=True, help="Brand.")
@click.option("--price", required=True, help="Price (e.g. 120.00).")
@click.option("--original-price", default=None, help="Price before discount.")
@click.option("--description", required=True, help="Description (10-2000 characters).")
@click.option("--category", required=True, help="Category slug.")
@click.option("--size", "sizes", multiple=True, required=True, help="Size and stock as 'Size:Stock'. Repeatable.")
@click.option("--image", "images", multiple=True, help="Image URL. Repeatable.")
@click.option("--featured", is_flag=True, default=False, help="Show on the home page.")
@click.pass_obj
def product_add(
    container: Container,
    product_id: str,
    name: str,
    brand: str,
    price: str,
    original_price: str | None,
    description: str,
    category: str,
    sizes: tuple[str, ...],
    images: tuple[str, ...],
    featured: bool,
) -> None:
    """Add a new product to the catalog."""
    spec = ProductSpec(
        id=product_id,
        name=name,
        brand=brand,
        price=price,
        description=description,
        sizes=[_parse_size(raw) for raw in sizes],
        category=category,
        images=list(images),
        original_price=original_price,
        featured=featured,
    )

    try:
        dto = AddProductHandler(container.unit_of_work()).handle(spec)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' added at ${dto.price:.2f}")


@click.command("update-price")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 99.99).")
@click.pass_obj
def product_update_price(container: Container, product_id: str, price: str) -> None:
    """Change a product's price. Existing orders keep the price they paid."""
    try:
        dto = UpdateProductHandler(container.unit_of_work()).handle(product_id, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} price updated to ${dto.price:.2f}")


@click.command("set-stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--size", required=True, help="Size label.")
@click.option("--stock", required=True, type=int, help="Units on hand for that size.")
@click.pass_obj
def product_set_stock(container: Container, product_id: str, size: str, stock: int) -> None:
    """Set the stock of one size (adds the size if it is new)."""
    try:
        UpdateProductHandler(container.unit_of_work()).set_stock(
            product_id, SizeSpec(value=size, stock=stock)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} size {size} stock set to {stock}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(container: Container, product_id: str) -> None:
    """Remove a product from the catalog. Past orders keep their lines."""
    try:
        DeleteProductHandler(container.unit_of_work()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
