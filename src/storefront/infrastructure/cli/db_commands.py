"""CLI commands for the database and the HTTP server."""

from __future__ import annotations

import click
import uvicorn

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.http.app import create_app


@click.command("init")
@click.option("--seed/--no-seed", default=True, show_default=True, help="Insert sample catalog data.")
@click.pass_obj
def db_init(container: Container, seed: bool) -> None:
    """Create tables, the admin account and sample data."""
    try:
        added = container.init_database(seed=seed)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Database ready.")
    if added:
        click.echo(f"Inserted {added} sample products.")


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=3000, show_default=True, type=int, help="Bind port.")
@click.pass_obj
def serve(container: Container, host: str, port: int) -> None:
    """Run the HTTP API."""
    uvicorn.run(create_app(container), host=host, port=port, log_config=None)
