"""Tests for the catalog use cases: list, show, add, deactivate, seed."""

import pytest

from storefront.application.add_product import AddProductHandler
from storefront.application.deactivate_product import DeactivateProductHandler
from storefront.application.list_products import ListProductsHandler, ShowProductHandler
from storefront.domain.exceptions import ConstraintViolation, NotFoundError, ValidationError
from storefront.domain.model.product import Product, ProductCategory
from storefront.infrastructure.persistence.seed import SEED_PRODUCTS, seed_catalog
from tests.fakes import FakeProductRepository


def _catalog() -> FakeProductRepository:
    return FakeProductRepository(
        [
            Product(id="deluxe", name="Ultimate Deluxe Pack", price=60000, category="premium", items=["a"]),
            Product(id="starter", name="Starter Snack Pack", price=25000, category="starter", items=["b"]),
            Product(id="mini", name="Mini Starter", price=15000, category="starter", items=["c"]),
            Product(
                id="old", name="Old Starter", price=9000, category="starter", items=["d"], is_active=False
            ),
        ]
    )


class TestListProducts:

    def test_active_only_cheapest_first(self):
        products = ListProductsHandler(_catalog()).handle()
        assert [p.id for p in products] == ["mini", "starter", "deluxe"]

    def test_include_inactive(self):
        products = ListProductsHandler(_catalog()).handle(active_only=False)
        assert [p.id for p in products] == ["old", "mini", "starter", "deluxe"]

    def test_by_category(self):
        products = ListProductsHandler(_catalog()).handle(category="starter")
        assert [p.id for p in products] == ["mini", "starter"]

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            ListProductsHandler(_catalog()).handle(category="bulk")


class TestShowProduct:

    def test_found(self):
        product = ShowProductHandler(_catalog()).handle("deluxe")
        assert product.category is ProductCategory.PREMIUM

    def test_missing_returns_none(self):
        assert ShowProductHandler(_catalog()).handle("ghost") is None

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError, match="Product ID is required"):
            ShowProductHandler(_catalog()).handle("")


class TestAddProduct:

    def test_adds_with_generated_id(self):
        repo = FakeProductRepository()
        product = AddProductHandler(repo).handle(
            name="  Lunchbox Pack ", price=19900, category="starter", items=["1x Wrap"]
        )
        assert product.id
        assert product.name == "Lunchbox Pack"
        assert repo.get_by_id(product.id) is product

    def test_invalid_product_not_stored(self):
        repo = FakeProductRepository()
        with pytest.raises(ValidationError):
            AddProductHandler(repo).handle(name="X", price=0, category="starter", items=[])
        assert repo.list_all() == []

    def test_duplicate_id_rejected(self):
        with pytest.raises(ConstraintViolation):
            AddProductHandler(_catalog()).handle(
                name="Another", price=100, category="family", items=["x"], product_id="mini"
            )


class TestDeactivateProduct:

    def test_soft_delete(self):
        repo = _catalog()
        DeactivateProductHandler(repo).handle("mini")
        product = repo.get_by_id("mini")
        assert product is not None
        assert product.is_active is False
        assert "mini" not in [p.id for p in ListProductsHandler(repo).handle()]

    def test_missing_product(self):
        with pytest.raises(NotFoundError, match="'ghost' not found"):
            DeactivateProductHandler(_catalog()).handle("ghost")


class TestSeedCatalog:

    def test_seeds_empty_catalog(self):
        repo = FakeProductRepository()
        created = seed_catalog(repo)
        assert len(created) == len(SEED_PRODUCTS)
        assert [p.price for p in repo.list_all()] == [25000, 45000, 60000]

    def test_skips_non_empty_catalog(self):
        repo = FakeProductRepository()
        seed_catalog(repo)
        assert seed_catalog(repo) == []
        assert len(repo.list_all()) == 3
