"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
This is the only place that coordinates multiple aggregates (Product
lookup + Order creation).
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CreateOrderRequest
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, PaymentStatus
from storefront.domain.model.value_objects import DELIVERY_FEE
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.order_pricing_service import OrderPricingService

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, request: CreateOrderRequest) -> Order:
        """Create a new order from a checkout submission.

        Steps:
        1. Re-price every item from the catalog (client prices ignored).
        2. Compute totals from those prices plus the delivery fee.
        3. Let the Order aggregate validate all business rules.
        4. Persist and return the stored order.
        """
        if not request.items:
            raise ValidationError("Order must contain at least one item", subject="Order validation")

        log = logger.bind(item_count=len(request.items))

        pricing = OrderPricingService(self._product_repo)
        line_items = pricing.price_items(request.items)

        totals = Order.calculate_totals(line_items, DELIVERY_FEE)

        order = Order(
            customer_details=request.customer_details,
            delivery_address=request.delivery_address,
            items=line_items,
            subtotal=totals.subtotal,
            delivery_fee=totals.delivery_fee,
            total=totals.total,
            payment_method=request.payment_method,
            payment_status=PaymentStatus.PENDING,
            notes=request.notes,
            customer_id=request.customer_id,
        )

        saved = self._order_repo.create(order)
        log.info(
            "order.created",
            order_id=saved.id,
            reference_number=saved.reference_number,
            total=saved.total,
        )
        return saved
