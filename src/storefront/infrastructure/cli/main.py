import sqlite3
from pathlib import Path

import click

from storefront.infrastructure import settings
from storefront.infrastructure.bootstrap import open_database
from storefront.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_payment,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_deactivate,
    product_list,
    product_seed,
    product_show,
)
from storefront.infrastructure.logging_config import configure_logging


class AppContext:
    """Carries the database location; the connection opens on first use."""

    def __init__(self, database: str | Path) -> None:
        self.database = database
        self._conn: sqlite3.Connection | None = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = open_database(self.database)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


@click.group()
@click.option(
    "--database",
    default=settings.DATABASE_PATH,
    show_default=True,
    help="SQLite database file.",
)
@click.option("--log-level", default=settings.LOG_LEVEL, show_default=True)
@click.pass_context
def cli(ctx: click.Context, database: str, log_level: str) -> None:
    """Storefront: catalog and order management"""
    configure_logging(level=log_level, json_output=settings.LOG_JSON)
    app = AppContext(database)
    ctx.obj = app
    ctx.call_on_close(app.close)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_payment)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_deactivate)
product.add_command(product_list)
product.add_command(product_seed)
product.add_command(product_show)
