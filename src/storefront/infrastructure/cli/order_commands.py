"""CLI commands for orders."""

from __future__ import annotations

import click

from storefront.application.dto import (
    CustomerSpec,
    OrderDTO,
    OrderItemSpec,
    PlaceOrderCommand,
)
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'prod-1:38:2,prod-2:37:1' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        parts = entry.rsplit(":", 2)
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductId:Size:Quantity'."
            )
        product_id, size, qty_str = parts
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty, size=size.strip()))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_method})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>")
    if dto.customer_phone:
        click.echo(f"Phone:    {dto.customer_phone}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<28} {'Size':>5} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*61}")
    for item in dto.items:
        name = item.product_name or item.product_id
        click.echo(
            f"  {name:<28} {item.size:>5} {item.quantity:>5} "
            f"{item.price_at_purchase:>10.2f} {item.line_total:>10.2f}"
        )
    click.echo(f"  {'-'*61}")
    click.echo(f"  {'Order Total':<39} {dto.total:>21.2f}")


@click.command("place")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--name", required=True, help="Customer full name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--phone", default=None, help="Customer phone (10-15 digits).")
@click.option("--items", required=True, help="Items as 'ProductId:Size:Qty,...'.")
@click.option("--total", required=True, help="Order total as shown to the customer.")
@click.option("--method", "payment_method", default="cash", show_default=True, help="Payment method.")
@click.option("--notes", default=None, help="Free-form notes.")
@click.pass_obj
def order_place(
    container: Container,
    order_id: str,
    name: str,
    email: str,
    phone: str | None,
    items: str,
    total: str,
    payment_method: str,
    notes: str | None,
) -> None:
    """Place an order against current stock."""
    command = PlaceOrderCommand(
        id=order_id,
        items=_parse_items(items),
        customer=CustomerSpec(full_name=name, email=email, phone=phone),
        total=total,
        payment_method=payment_method,
        notes=notes,
    )
    handler = PlaceOrderHandler(
        container.unit_of_work(),
        container.notification_publisher(),
        stock_policy=container.settings.stock_policy_enum,
        accepted_methods=container.settings.accepted_payment_methods,
    )

    try:
        dto = handler.handle(command)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(container: Container, order_id: str) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(container.unit_of_work()).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.pass_obj
def order_list(container: Container) -> None:
    """List orders, newest first."""
    try:
        orders = ListOrdersHandler(container.unit_of_work()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<16} {'Customer':<24} {'Items':>5} {'Total':>10} {'Status':<8}")
    click.echo("-" * 68)
    for o in orders:
        click.echo(
            f"{o.id:<16} {o.customer_name:<24} {len(o.items):>5} {o.total:>10.2f} {o.status:<8}"
        )
