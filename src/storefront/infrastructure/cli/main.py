import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.cli.category_commands import (
    category_add,
    category_delete,
    category_list,
)
from storefront.infrastructure.cli.db_commands import db_init, serve
from storefront.infrastructure.cli.order_commands import (
    order_list,
    order_place,
    order_show,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_set_stock,
    product_show,
    product_update_price,
)
from storefront.infrastructure.config import load_settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML settings file (defaults to $STOREFRONT_CONFIG).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """Storefront: catalog, stock and orders"""
    if ctx.obj is not None:
        return
    try:
        settings = load_settings(config_path)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    configure_logging(settings.log_level, settings.log_file or None)
    container = Container(settings)
    ctx.obj = container
    ctx.call_on_close(container.close)


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def category() -> None:
    """Manage categories."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
cli.add_command(serve)
db.add_command(db_init)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_set_stock)
product.add_command(product_show)
product.add_command(product_update_price)
category.add_command(category_add)
category.add_command(category_delete)
category.add_command(category_list)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
