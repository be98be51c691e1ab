"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. The database connection
is opened here and passed into each repository.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from storefront.infrastructure import settings
from storefront.infrastructure.persistence.database import connect
from storefront.infrastructure.persistence.sqlite_order_repository import (
    SqliteOrderRepository,
)
from storefront.infrastructure.persistence.sqlite_product_repository import (
    SqliteProductRepository,
)


def open_database(path: str | Path | None = None) -> sqlite3.Connection:
    return connect(path or settings.DATABASE_PATH)


def product_repository(conn: sqlite3.Connection) -> SqliteProductRepository:
    return SqliteProductRepository(conn)


def order_repository(conn: sqlite3.Connection) -> SqliteOrderRepository:
    return SqliteOrderRepository(conn)
