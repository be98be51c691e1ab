"""Application service: Deactivate Product use case.

Products are never hard-deleted. Existing orders keep their price
snapshot; new orders referencing the product are refused at pricing.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import NotFoundError
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class DeactivateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        if not self._product_repo.deactivate(product_id):
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        logger.info("product.deactivated", product_id=product_id)
