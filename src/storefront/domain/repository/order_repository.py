"""Abstract repository for Order aggregate.

The repository is dumb storage: every status rule lives on the Order
entity. ``update`` takes an ``expected`` mapping so callers can make the
write conditional on what they loaded (optimistic concurrency).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from storefront.domain.model.order import Order, OrderStatus, PaymentStatus


class OrderRepository(ABC):

    @abstractmethod
    def create(self, order: Order) -> Order:
        """Persist a new order.

        Raises ConstraintViolation if the ID or reference number is
        already taken.
        """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_reference_number(self, reference_number: str) -> Order | None:
        """Return an order by its customer-facing reference, or None."""

    @abstractmethod
    def update(
        self,
        order_id: str,
        fields: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> Order:
        """Write ``fields`` (status, payment_status, notes, updated_at).

        Raises NotFoundError if the order does not exist, and
        ConcurrentUpdateError if the stored row no longer matches
        ``expected``.
        """

    @abstractmethod
    def list_all(
        self,
        status: OrderStatus | None = None,
        payment_status: PaymentStatus | None = None,
        limit: int | None = None,
    ) -> list[Order]:
        """Return orders newest first, optionally filtered."""
