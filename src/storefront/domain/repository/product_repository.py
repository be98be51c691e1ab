"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQLite, in-memory) live in
the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product, ProductCategory


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_by_category(self, category: ProductCategory) -> list[Product]:
        """Return the active products of one category, cheapest first."""

    @abstractmethod
    def list_all(self, is_active: bool | None = None) -> list[Product]:
        """Return the catalog, cheapest first, optionally filtered on ``is_active``."""

    @abstractmethod
    def create(self, product: Product) -> Product:
        """Persist a new product. Duplicate IDs raise ConstraintViolation."""

    @abstractmethod
    def deactivate(self, product_id: str) -> bool:
        """Soft delete a product. Returns False if no such product exists."""
