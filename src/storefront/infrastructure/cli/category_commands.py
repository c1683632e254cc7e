"""CLI commands for catalog categories."""

from __future__ import annotations

import click

from storefront.application.manage_categories import (
    AddCategoryHandler,
    DeleteCategoryHandler,
    ListCategoriesHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


@click.command("list")
@click.pass_obj
def category_list(container: Container) -> None:
    """List all categories."""
    categories = ListCategoriesHandler(container.unit_of_work()).handle()

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Slug':<20}")
    click.echo("-" * 48)
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<20} {c.slug:<20}")


@click.command("add")
@click.option("--name", required=True, help="Display name.")
@click.option("--slug", required=True, help="URL slug (lowercase, digits, dashes).")
@click.pass_obj
def category_add(container: Container, name: str, slug: str) -> None:
    """Add a category."""
    try:
        dto = AddCategoryHandler(container.unit_of_work()).handle(name=name, slug=slug)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{dto.id} '{dto.name}' ({dto.slug}) added")


@click.command("delete")
@click.option("--id", "category_id", required=True, type=int, help="Category ID.")
@click.pass_obj
def category_delete(container: Container, category_id: int) -> None:
    """Delete a category."""
    try:
        DeleteCategoryHandler(container.unit_of_work()).handle(category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category_id} deleted.")
