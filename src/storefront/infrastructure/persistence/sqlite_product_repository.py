"""SQLite-backed implementation of ProductRepository."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone

import structlog

from storefront.domain.exceptions import ConstraintViolation
from storefront.domain.model.product import Product, ProductCategory
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class SqliteProductRepository(ProductRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._conn.execute(
            "SELECT * FROM products WHERE id = ?", (product_id,)
        ).fetchone()
        return self._to_domain(row) if row else None

    def list_by_category(self, category: ProductCategory) -> list[Product]:
        rows = self._conn.execute(
            "SELECT * FROM products WHERE category = ? AND is_active = 1 "
            "ORDER BY price ASC",
            (category.value,),
        ).fetchall()
        return [self._to_domain(row) for row in rows]

    def list_all(self, is_active: bool | None = None) -> list[Product]:
        query = "SELECT * FROM products"
        params: tuple = ()
        if is_active is not None:
            query += " WHERE is_active = ?"
            params = (1 if is_active else 0,)
        query += " ORDER BY price ASC"
        return [self._to_domain(row) for row in self._conn.execute(query, params)]

    def create(self, product: Product) -> Product:
        raw = self._to_raw(product)
        columns = ", ".join(raw)
        placeholders = ", ".join("?" for _ in raw)
        try:
            with self._conn:
                self._conn.execute(
                    f"INSERT INTO products ({columns}) VALUES ({placeholders})",
                    tuple(raw.values()),
                )
        except sqlite3.IntegrityError as exc:
            logger.warning("product.insert_rejected", product_id=product.id)
            raise ConstraintViolation(
                f"Product '{product.id}' could not be stored: {exc}"
            ) from exc
        return product

    def deactivate(self, product_id: str) -> bool:
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE products SET is_active = 0, updated_at = ? WHERE id = ?",
                (datetime.now(timezone.utc).isoformat(), product_id),
            )
        return cursor.rowcount > 0

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": product.price,
            "category": product.category.value,
            "emoji": product.emoji,
            "badge": product.badge,
            "items": json.dumps(product.items),
            "is_active": 1 if product.is_active else 0,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            price=row["price"],
            category=row["category"],
            emoji=row["emoji"] or "",
            badge=row["badge"] or "",
            items=json.loads(row["items"]),
            is_active=row["is_active"] == 1,
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
