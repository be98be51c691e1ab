"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, ProductCategory


def _make_product(**overrides) -> Product:
    data = {
        "id": "starter-1",
        "name": "Starter Snack Pack",
        "price": 25000,
        "category": "starter",
        "items": ["2x Fruity Rainbow Bites", "2x Crispy Veggie Chips"],
        "description": "Perfect for trying our delicious flavors",
        "badge": "Best for Trying",
    }
    data.update(overrides)
    return Product(**data)


class TestProductCreation:

    def test_happy_path(self):
        product = _make_product()
        assert product.category is ProductCategory.STARTER
        assert product.is_active is True
        assert product.created_at.tzinfo is not None

    def test_category_enum_accepted(self):
        product = _make_product(category=ProductCategory.PREMIUM)
        assert product.category is ProductCategory.PREMIUM


class TestProductValidation:

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError, match="at least 2 characters"):
            _make_product(name=" A ")

    @pytest.mark.parametrize("price", [0, -100, 99.5, "25000", True])
    def test_non_positive_or_non_integer_price_rejected(self, price):
        with pytest.raises(ValidationError, match="price must be positive"):
            _make_product(price=price)

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError, match="starter, family, or premium"):
            _make_product(category="bulk")

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _make_product(items=[])

    @pytest.mark.parametrize("items", [[1, None], ["2x Mango Fruit Roll", "  "], ["ok", 3]])
    def test_non_text_items_rejected(self, items):
        with pytest.raises(ValidationError, match="items must be non-empty text"):
            _make_product(items=items)

    def test_all_violations_aggregated(self):
        with pytest.raises(ValidationError) as excinfo:
            _make_product(name="", price=0, category="x", items=[])
        assert len(excinfo.value.errors) == 4
        assert str(excinfo.value).startswith("Product validation failed: ")


class TestProductBehaviour:

    def test_available_only_when_active(self):
        assert _make_product().is_available()
        assert not _make_product(is_active=False).is_available()

    def test_deactivate_is_soft_delete(self):
        product = _make_product()
        before = product.updated_at
        product.deactivate()
        assert product.is_active is False
        assert product.updated_at >= before

    def test_formatted_price(self):
        assert _make_product(price=25000).formatted_price == "R250.00"
        assert _make_product(price=5099).formatted_price == "R50.99"

    def test_to_dict_has_raw_and_display_price(self):
        data = _make_product(price=45000, category="family").to_dict()
        assert data["price"] == 45000
        assert data["price_display"] == "R450.00"
        assert data["category"] == "family"
        assert data["items"] == ["2x Fruity Rainbow Bites", "2x Crispy Veggie Chips"]
