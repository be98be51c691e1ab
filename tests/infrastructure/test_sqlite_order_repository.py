"""Integration tests for SqliteOrderRepository against an in-memory database."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront.domain.exceptions import (
    ConcurrentUpdateError,
    ConstraintViolation,
    NotFoundError,
)
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from storefront.domain.model.value_objects import CustomerDetails, DeliveryAddress
from storefront.infrastructure.persistence.database import connect
from storefront.infrastructure.persistence.sqlite_order_repository import (
    SqliteOrderRepository,
)


@pytest.fixture
def repo():
    conn = connect(":memory:")
    yield SqliteOrderRepository(conn)
    conn.close()


def _order(reference: str | None = None, **overrides) -> Order:
    data = {
        "customer_details": CustomerDetails("Lebo", "Mokoena", "lebo@example.co.za", "0821234567"),
        "delivery_address": DeliveryAddress("12 Vilakazi St", "Soweto", "Gauteng", "1804"),
        "items": [
            OrderLineItem("p1", "Starter Snack Pack", 10000, 2),
            OrderLineItem("p2", "Family Favorites Pack", 45000, 1),
        ],
        "subtotal": 65000,
        "delivery_fee": 5000,
        "total": 70000,
        "payment_method": "payfast",
        "notes": "Gate code 1234",
        "reference_number": reference,
    }
    data.update(overrides)
    return Order(**data)


class TestCreateAndLoad:

    def test_round_trip(self, repo):
        order = _order(customer_id="cust-1")
        repo.create(order)
        loaded = repo.get_by_id(order.id)
        assert loaded.reference_number == order.reference_number
        assert loaded.customer_details == order.customer_details
        assert loaded.delivery_address == order.delivery_address
        assert loaded.items == order.items
        assert loaded.total == 70000
        assert loaded.payment_method is PaymentMethod.PAYFAST
        assert loaded.status is OrderStatus.PENDING
        assert loaded.notes == "Gate code 1234"
        assert loaded.customer_id == "cust-1"
        assert loaded.created_at == order.created_at

    def test_get_by_reference(self, repo):
        order = _order("LEBO-ABC-12345")
        repo.create(order)
        assert repo.get_by_reference_number("LEBO-ABC-12345").id == order.id

    def test_missing(self, repo):
        assert repo.get_by_id("ghost") is None
        assert repo.get_by_reference_number("LEBO-NONE-00000") is None

    def test_duplicate_reference_rejected(self, repo):
        repo.create(_order("LEBO-ABC-12345"))
        with pytest.raises(ConstraintViolation):
            repo.create(_order("LEBO-ABC-12345"))
        assert len(repo.list_all()) == 1


class TestConditionalUpdate:

    def test_update_status(self, repo):
        order = _order()
        repo.create(order)
        now = datetime.now(timezone.utc)
        updated = repo.update(
            order.id,
            {"status": OrderStatus.CONFIRMED, "updated_at": now},
            expected={"status": OrderStatus.PENDING},
        )
        assert updated.status is OrderStatus.CONFIRMED
        assert updated.updated_at == now
        assert updated.total == 70000

    def test_stale_expectation_raises(self, repo):
        order = _order()
        repo.create(order)
        repo.update(order.id, {"status": OrderStatus.CANCELLED})
        with pytest.raises(ConcurrentUpdateError):
            repo.update(
                order.id,
                {"status": OrderStatus.CONFIRMED},
                expected={"status": OrderStatus.PENDING},
            )
        assert repo.get_by_id(order.id).status is OrderStatus.CANCELLED

    def test_missing_order(self, repo):
        with pytest.raises(NotFoundError):
            repo.update("ghost", {"status": OrderStatus.CONFIRMED})

    def test_only_status_columns_are_writable(self, repo):
        order = _order()
        repo.create(order)
        with pytest.raises(ValueError):
            repo.update(order.id, {"total": 1})
        with pytest.raises(ValueError):
            repo.update(order.id, {})


class TestListAll:

    def test_newest_first_with_filters(self, repo):
        base = datetime(2024, 5, 1, tzinfo=timezone.utc)
        repo.create(_order("LEBO-A-00001", created_at=base))
        repo.create(
            _order(
                "LEBO-B-00002",
                created_at=base + timedelta(hours=1),
                status="confirmed",
                payment_status="paid",
            )
        )
        repo.create(_order("LEBO-C-00003", created_at=base + timedelta(hours=2)))

        assert [o.reference_number for o in repo.list_all()] == [
            "LEBO-C-00003",
            "LEBO-B-00002",
            "LEBO-A-00001",
        ]
        assert [o.reference_number for o in repo.list_all(status=OrderStatus.PENDING)] == [
            "LEBO-C-00003",
            "LEBO-A-00001",
        ]
        assert [
            o.reference_number for o in repo.list_all(payment_status=PaymentStatus.PAID)
        ] == ["LEBO-B-00002"]
        assert len(repo.list_all(limit=1)) == 1
