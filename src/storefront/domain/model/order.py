"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its line items. Items and totals
are fixed at checkout; afterwards the only legal mutations are the two
state machine transitions below.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable
from uuid import uuid4

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.value_objects import (
    CustomerDetails,
    DeliveryAddress,
    format_price,
)


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    BANK_TRANSFER = "bank_transfer"
    MOBILE_MONEY = "mobile_money"
    CARD = "card"
    PAYFAST = "payfast"


# ---------------------------------------------------------------------------
# Transition tables
# ---------------------------------------------------------------------------
ORDER_STATUS_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}

PAYMENT_STATUS_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PAID, PaymentStatus.FAILED}),
    PaymentStatus.PAID: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.FAILED: frozenset({PaymentStatus.PAID}),
    PaymentStatus.REFUNDED: frozenset(),
}

REFERENCE_PREFIX = "LEBO"
_BASE36 = string.digits + string.ascii_uppercase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_reference_number(now: datetime | None = None) -> str:
    """Build ``LEBO-<millis in base36>-<5 random chars>``.

    Not unique by construction: the orders table's UNIQUE constraint is
    what rejects a collision.
    """
    now = now or _utcnow()
    timestamp = _to_base36(int(now.timestamp() * 1000))
    suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
    return f"{REFERENCE_PREFIX}-{timestamp}-{suffix}"


def _coerce(enum_cls: type[Enum], value: Any) -> Enum | None:
    try:
        return enum_cls(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class OrderLineItem:
    """A line as priced at checkout. ``price`` is in cents and always
    comes from the catalog, never from the client."""

    product_id: str
    name: str
    price: int
    quantity: int

    @property
    def total(self) -> int:
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> OrderLineItem:
        return cls(
            product_id=raw["product_id"],
            name=raw["name"],
            price=raw["price"],
            quantity=raw["quantity"],
        )


@dataclass(frozen=True)
class OrderTotals:
    subtotal: int
    delivery_fee: int
    total: int


@dataclass
class Order:
    """Aggregate root for customer orders.

    Construction validates every field and collects all violations into
    a single ValidationError. ``id`` and ``reference_number`` are
    generated when not supplied.
    """

    customer_details: CustomerDetails | None
    delivery_address: DeliveryAddress | None
    items: list[OrderLineItem]
    subtotal: int
    delivery_fee: int
    total: int
    payment_method: PaymentMethod | str
    payment_status: PaymentStatus | str = PaymentStatus.PENDING
    status: OrderStatus | str = OrderStatus.PENDING
    notes: str = ""
    id: str | None = None
    reference_number: str | None = None
    customer_id: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        errors = self.violations()
        if errors:
            raise ValidationError(errors, subject="Order validation")

        self.payment_method = PaymentMethod(self.payment_method)
        self.payment_status = PaymentStatus(self.payment_status)
        self.status = OrderStatus(self.status)
        self.items = list(self.items)
        self.notes = self.notes or ""
        if not self.id:
            self.id = str(uuid4())
        if not self.reference_number:
            self.reference_number = generate_reference_number()

    def violations(self) -> list[str]:
        """Every rule this order currently breaks, in a stable order."""
        errors: list[str] = []

        if self.customer_details is None:
            errors.append("Customer details are required")
        else:
            errors.extend(self.customer_details.violations())

        if self.delivery_address is None:
            errors.append("Delivery address is required")
        else:
            errors.extend(self.delivery_address.violations())

        if not self.items:
            errors.append("Order must contain at least one item")

        if isinstance(self.total, bool) or not isinstance(self.total, int) or self.total <= 0:
            errors.append("Order total must be positive")

        if _coerce(PaymentMethod, self.payment_method) is None:
            errors.append("Invalid payment method")
        if _coerce(PaymentStatus, self.payment_status) is None:
            errors.append(f"Invalid payment status: {self.payment_status}")
        if _coerce(OrderStatus, self.status) is None:
            errors.append(f"Invalid order status: {self.status}")

        return errors

    # --- Pricing --------------------------------------------------------------

    @staticmethod
    def calculate_totals(items: Iterable[OrderLineItem], delivery_fee: int) -> OrderTotals:
        """Sum ``price * quantity`` and add the delivery fee.

        Pure arithmetic on the prices it is given; the caller must have
        taken them from the catalog.
        """
        subtotal = sum(item.price * item.quantity for item in items)
        return OrderTotals(
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=subtotal + delivery_fee,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus | str) -> bool:
        target = _coerce(OrderStatus, new_status)
        return target in ORDER_STATUS_TRANSITIONS[self.status]

    def can_be_cancelled(self) -> bool:
        return OrderStatus.CANCELLED in ORDER_STATUS_TRANSITIONS[self.status]

    @property
    def is_terminal(self) -> bool:
        return not ORDER_STATUS_TRANSITIONS[self.status]

    def update_status(self, new_status: OrderStatus | str) -> None:
        """Move the order along ORDER_STATUS_TRANSITIONS.

        Raises InvalidTransitionError and leaves the order untouched if
        the edge does not exist.
        """
        target = _coerce(OrderStatus, new_status)
        if target not in ORDER_STATUS_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                "order status", self.status.value, _label(new_status)
            )
        self.status = target
        self.updated_at = _utcnow()

    def update_payment_status(self, new_status: PaymentStatus | str) -> None:
        """Move the payment along PAYMENT_STATUS_TRANSITIONS.

        This is the one place the two machines meet: a payment that
        becomes ``paid`` while the order is still ``pending`` confirms
        the order in the same update.
        """
        target = _coerce(PaymentStatus, new_status)
        if target not in PAYMENT_STATUS_TRANSITIONS[self.payment_status]:
            raise InvalidTransitionError(
                "payment status", self.payment_status.value, _label(new_status)
            )

        status = self.status
        if target is PaymentStatus.PAID and status is OrderStatus.PENDING:
            status = OrderStatus.CONFIRMED

        self.payment_status = target
        self.status = status
        self.updated_at = _utcnow()

    # --- Serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "reference_number": self.reference_number,
            "customer_id": self.customer_id,
            "customer_details": self.customer_details.to_dict(),
            "delivery_address": self.delivery_address.to_dict(),
            "items": [item.to_dict() for item in self.items],
            "subtotal": self.subtotal,
            "subtotal_display": format_price(self.subtotal),
            "delivery_fee": self.delivery_fee,
            "delivery_fee_display": format_price(self.delivery_fee),
            "total": self.total,
            "total_display": format_price(self.total),
            "payment_method": self.payment_method.value,
            "payment_status": self.payment_status.value,
            "status": self.status.value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


def _label(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else str(value)
