"""Application service: List Orders use case (query)."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, OrderStatus, PaymentStatus
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        status: str | None = None,
        payment_status: str | None = None,
        limit: int | None = None,
    ) -> list[Order]:
        """Return orders newest first, optionally filtered by either status."""
        if limit is not None and limit <= 0:
            raise ValidationError("Limit must be positive")

        try:
            status_filter = OrderStatus(status) if status else None
            payment_filter = PaymentStatus(payment_status) if payment_status else None
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        return self._order_repo.list_all(
            status=status_filter,
            payment_status=payment_filter,
            limit=limit,
        )
