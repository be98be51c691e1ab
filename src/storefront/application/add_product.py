"""Application service: Add Product use case."""

from __future__ import annotations

from uuid import uuid4

import structlog

from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: int,
        category: str,
        items: list[str],
        description: str = "",
        emoji: str = "",
        badge: str = "",
        product_id: str | None = None,
    ) -> Product:
        """Add a new product to the catalog.

        ``price`` is in cents. The Product entity validates everything;
        a duplicate ``product_id`` is rejected by the repository.
        """
        product = Product(
            id=product_id or str(uuid4()),
            name=name.strip() if isinstance(name, str) else name,
            price=price,
            category=category,
            items=items,
            description=description,
            emoji=emoji,
            badge=badge,
        )
        self._product_repo.create(product)
        logger.info("product.created", product_id=product.id, price=product.price)
        return product
