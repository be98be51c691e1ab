"""Product aggregate.

Products live independently of orders. They are seeded or added by an
admin, read many times, and soft-deleted (``is_active = False``) rather
than removed, so historical orders never point at a missing product.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import format_price


class ProductCategory(Enum):
    STARTER = "starter"
    FAMILY = "family"
    PREMIUM = "premium"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_category(value: Any) -> bool:
    try:
        ProductCategory(value)
    except ValueError:
        return False
    return True


@dataclass
class Product:
    """A product in the catalog.

    Validation runs in ``__post_init__``: an invalid Product can never
    exist. ``price`` is in cents and is the only price an order ever uses.
    """

    id: str
    name: str
    price: int
    category: ProductCategory | str
    items: list[str]
    description: str = ""
    emoji: str = ""
    badge: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        errors = self.violations()
        if errors:
            raise ValidationError(errors, subject="Product validation")
        self.category = ProductCategory(self.category)
        self.items = list(self.items)

    def violations(self) -> list[str]:
        errors: list[str] = []
        if not isinstance(self.name, str) or len(self.name.strip()) < 2:
            errors.append("Product name must be at least 2 characters")
        if (
            isinstance(self.price, bool)
            or not isinstance(self.price, int)
            or self.price <= 0
        ):
            errors.append("Product price must be positive")
        if not _is_category(self.category):
            errors.append("Product category must be starter, family, or premium")
        if not isinstance(self.items, (list, tuple)) or len(self.items) == 0:
            errors.append("Product must include at least one item")
        elif not all(isinstance(i, str) and i.strip() for i in self.items):
            errors.append("Product items must be non-empty text")
        return errors

    # --- Behaviour ------------------------------------------------------------

    def is_available(self) -> bool:
        return self.is_active is True

    def deactivate(self) -> None:
        """Soft delete: the product stays readable but can't be ordered."""
        self.is_active = False
        self.updated_at = _utcnow()

    @property
    def formatted_price(self) -> str:
        return format_price(self.price)

    # --- Serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "price_display": self.formatted_price,
            "category": self.category.value,
            "emoji": self.emoji,
            "badge": self.badge,
            "items": list(self.items),
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
