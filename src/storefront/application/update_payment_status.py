"""Application service: Update Payment Status use case.

Typically driven by a payment notification. Paying a pending order also
confirms it (see ``Order.update_payment_status``), so both status fields
are written back together.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import InvalidTransitionError, NotFoundError
from storefront.domain.model.order import Order, PaymentStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdatePaymentStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, new_status: PaymentStatus | str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")

        expected = {"status": order.status, "payment_status": order.payment_status}
        log = logger.bind(
            order_id=order_id,
            current_payment_status=order.payment_status.value,
        )

        try:
            order.update_payment_status(new_status)
        except InvalidTransitionError as exc:
            log.warning("order.invalid_payment_transition", requested=exc.requested)
            raise

        updated = self._order_repo.update(
            order_id,
            {
                "payment_status": order.payment_status,
                "status": order.status,
                "updated_at": order.updated_at,
            },
            expected=expected,
        )
        log.info(
            "order.payment_status_updated",
            payment_status=updated.payment_status.value,
            status=updated.status.value,
        )
        return updated
