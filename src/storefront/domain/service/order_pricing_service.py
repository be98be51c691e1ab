"""Domain service: Order Pricing.

Turns what the client asked for (product IDs + quantities) into line
items priced from the catalog. Whatever price the client sent is
ignored; the catalog is the only source of truth.

Every item is resolved and validated before anything is returned, so a
single bad item aborts the whole checkout and nothing is ever persisted
for a half-valid basket.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol

import structlog

from storefront.domain.exceptions import (
    ProductNotFoundError,
    ProductUnavailableError,
)
from storefront.domain.model.order import OrderLineItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class RequestedItem(Protocol):
    product_id: str
    quantity: Any


class OrderPricingService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def price_items(self, requested: Iterable[RequestedItem]) -> list[OrderLineItem]:
        """Resolve each requested item against the catalog, in order.

        Raises:
            ProductNotFoundError: the product ID is unknown.
            ProductUnavailableError: the product has been deactivated.
            InvalidQuantityError: quantity is not an integer in 1..50.
        """
        line_items: list[OrderLineItem] = []

        for item in requested:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                logger.warning("pricing.product_not_found", product_id=item.product_id)
                raise ProductNotFoundError(item.product_id)

            if not product.is_available():
                logger.warning("pricing.product_unavailable", product_id=product.id)
                raise ProductUnavailableError(product.name)

            quantity = Quantity.parse(item.quantity, product.name)

            line_items.append(
                OrderLineItem(
                    product_id=product.id,
                    name=product.name,
                    price=product.price,  # <-- catalog price, never the client's
                    quantity=quantity.value,
                )
            )

        return line_items
