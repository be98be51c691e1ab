"""SQLite-backed implementation of OrderRepository.

Nested values (customer details, address, line items) are stored as JSON
text columns. ``update`` is a single conditional ``UPDATE ... WHERE``, so
the compare-and-set against ``expected`` is atomic in SQLite.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from enum import Enum
from typing import Any

import structlog

from storefront.domain.exceptions import (
    ConcurrentUpdateError,
    ConstraintViolation,
    NotFoundError,
)
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentStatus,
)
from storefront.domain.model.value_objects import CustomerDetails, DeliveryAddress
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)

# Only these columns may change after an order is created.
UPDATABLE_COLUMNS = ("status", "payment_status", "notes", "updated_at")


class SqliteOrderRepository(OrderRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- OrderRepository interface --------------------------------------------

    def create(self, order: Order) -> Order:
        raw = self._to_raw(order)
        columns = ", ".join(raw)
        placeholders = ", ".join("?" for _ in raw)
        try:
            with self._conn:
                self._conn.execute(
                    f"INSERT INTO orders ({columns}) VALUES ({placeholders})",
                    tuple(raw.values()),
                )
        except sqlite3.IntegrityError as exc:
            logger.warning(
                "order.insert_rejected",
                order_id=order.id,
                reference_number=order.reference_number,
            )
            raise ConstraintViolation(
                f"Order {order.reference_number} could not be stored: {exc}"
            ) from exc
        return order

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._conn.execute(
            "SELECT * FROM orders WHERE id = ?", (order_id,)
        ).fetchone()
        return self._to_domain(row) if row else None

    def get_by_reference_number(self, reference_number: str) -> Order | None:
        row = self._conn.execute(
            "SELECT * FROM orders WHERE reference_number = ?", (reference_number,)
        ).fetchone()
        return self._to_domain(row) if row else None

    def update(
        self,
        order_id: str,
        fields: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> Order:
        expected = expected or {}
        if not fields:
            raise ValueError("Nothing to update")
        unknown = (set(fields) | set(expected)) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update order columns: {sorted(unknown)}")

        assignments = ", ".join(f"{column} = ?" for column in fields)
        conditions = "".join(f" AND {column} = ?" for column in expected)
        params = [
            *(self._to_column(v) for v in fields.values()),
            order_id,
            *(self._to_column(v) for v in expected.values()),
        ]

        with self._conn:
            cursor = self._conn.execute(
                f"UPDATE orders SET {assignments} WHERE id = ?{conditions}",
                params,
            )

        if cursor.rowcount == 0:
            current = self.get_by_id(order_id)
            if current is None:
                raise NotFoundError(f"Order {order_id} not found")
            logger.warning("order.concurrent_update", order_id=order_id)
            raise ConcurrentUpdateError(
                f"Order {order_id} was modified by another request"
            )

        return self.get_by_id(order_id)

    def list_all(
        self,
        status: OrderStatus | None = None,
        payment_status: PaymentStatus | None = None,
        limit: int | None = None,
    ) -> list[Order]:
        query = "SELECT * FROM orders"
        conditions: list[str] = []
        params: list[Any] = []

        if status is not None:
            conditions.append("status = ?")
            params.append(status.value)
        if payment_status is not None:
            conditions.append("payment_status = ?")
            params.append(payment_status.value)

        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY created_at DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        return [self._to_domain(row) for row in self._conn.execute(query, params)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_column(value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "reference_number": order.reference_number,
            "customer_id": order.customer_id,
            "customer_details": json.dumps(order.customer_details.to_dict()),
            "delivery_address": json.dumps(order.delivery_address.to_dict()),
            "items": json.dumps([item.to_dict() for item in order.items]),
            "subtotal": order.subtotal,
            "delivery_fee": order.delivery_fee,
            "total": order.total,
            "payment_method": order.payment_method.value,
            "payment_status": order.payment_status.value,
            "status": order.status.value,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(row: sqlite3.Row) -> Order:
        return Order(
            id=row["id"],
            reference_number=row["reference_number"],
            customer_id=row["customer_id"],
            customer_details=CustomerDetails.from_dict(json.loads(row["customer_details"])),
            delivery_address=DeliveryAddress.from_dict(json.loads(row["delivery_address"])),
            items=[OrderLineItem.from_dict(i) for i in json.loads(row["items"])],
            subtotal=row["subtotal"],
            delivery_fee=row["delivery_fee"],
            total=row["total"],
            payment_method=row["payment_method"],
            payment_status=row["payment_status"],
            status=row["status"],
            notes=row["notes"] or "",
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
