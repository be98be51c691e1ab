"""Application service: List / Show Products use cases (queries)."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, ProductCategory
from storefront.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, category: str | None = None, active_only: bool = True) -> list[Product]:
        """Return the catalog, cheapest first.

        A category listing only ever contains active products.
        """
        if category:
            try:
                products = self._product_repo.list_by_category(ProductCategory(category))
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
        else:
            products = self._product_repo.list_all()

        if active_only:
            products = [p for p in products if p.is_available()]
        return products


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> Product | None:
        if not product_id:
            raise ValidationError("Product ID is required")
        return self._product_repo.get_by_id(product_id)
