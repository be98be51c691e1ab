"""Application service: Show Order use case (query).

A missing order is a normal answer here, not an error: both lookups
return None and leave it to the caller to decide what that means.
"""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> Order | None:
        if not order_id:
            raise ValidationError("Order ID is required")
        return self._order_repo.get_by_id(order_id)

    def handle_by_reference(self, reference_number: str) -> Order | None:
        if not reference_number:
            raise ValidationError("Reference number is required")
        return self._order_repo.get_by_reference_number(reference_number.strip().upper())
