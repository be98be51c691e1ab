"""Initial catalog data (prices in cents).

Seeding is skipped when the catalog already has products, so running it
twice never creates duplicates.
"""

from __future__ import annotations

import structlog

from storefront.application.add_product import AddProductHandler
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)

_STARTER_ITEMS = [
    "2x Fruity Rainbow Bites",
    "2x Crispy Veggie Chips",
    "2x Berry Blast Popcorn",
]

_FAMILY_ITEMS = _STARTER_ITEMS + [
    "2x Spinach Power Puffs",
    "2x Mango Fruit Roll",
    "2x Broccoli Cheddar Squares",
]

SEED_PRODUCTS = [
    {
        "name": "Starter Snack Pack",
        "description": "Perfect for trying our delicious flavors",
        "price": 25000,  # R250.00
        "category": "starter",
        "emoji": "🎁",
        "badge": "Best for Trying",
        "items": _STARTER_ITEMS,
    },
    {
        "name": "Family Favorites Pack",
        "description": "Great variety for the whole family",
        "price": 45000,  # R450.00
        "category": "family",
        "emoji": "👨‍👩‍👧‍👦",
        "badge": "Most Popular",
        "items": _FAMILY_ITEMS,
    },
    {
        "name": "Ultimate Deluxe Pack",
        "description": "Everything you love - our complete collection",
        "price": 60000,  # R600.00
        "category": "premium",
        "emoji": "👑",
        "badge": "Best Value",
        "items": _FAMILY_ITEMS + [
            "2x Honey Granola Clusters",
            "2x Almond Joy Bites",
            "2x Strawberry Chewy Bars",
        ],
    },
]


def seed_catalog(product_repo: ProductRepository) -> list[Product]:
    """Create the seed products. Returns what was created (empty if skipped)."""
    existing = product_repo.list_all()
    if existing:
        logger.info("catalog.seed_skipped", existing=len(existing))
        return []

    handler = AddProductHandler(product_repo)
    created = [handler.handle(**data) for data in SEED_PRODUCTS]
    logger.info("catalog.seeded", count=len(created))
    return created
