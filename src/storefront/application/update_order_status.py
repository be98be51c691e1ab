"""Application service: Update Order Status use case.

The transition rule lives on the Order aggregate; this handler only
loads, delegates and writes back ``status`` and ``updated_at``. The
write is conditional on the status that was loaded, so two concurrent
updates of the same order cannot silently overwrite each other.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import InvalidTransitionError, NotFoundError
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, new_status: OrderStatus | str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")

        previous = order.status
        log = logger.bind(order_id=order_id, current_status=previous.value)

        try:
            order.update_status(new_status)
        except InvalidTransitionError as exc:
            log.warning("order.invalid_transition", requested=exc.requested)
            raise

        updated = self._order_repo.update(
            order_id,
            {"status": order.status, "updated_at": order.updated_at},
            expected={"status": previous},
        )
        log.info("order.status_updated", new_status=updated.status.value)
        return updated
