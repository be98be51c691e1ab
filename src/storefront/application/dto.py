"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Inputs accept both the
snake_case keys used in Python and the camelCase keys the storefront's
browser client sends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import (
    CustomerDetails,
    DeliveryAddress,
    format_price,
)


def _require_mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValidationError(f"{what} must be an object", subject="Order validation")
    return value


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for.

    ``price`` is whatever the client claimed. It is kept only so callers
    can pass the raw payload through; pricing never reads it.
    """

    product_id: str
    quantity: Any
    price: Any = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> OrderItemSpec:
        raw = _require_mapping(raw, "Order item")
        return cls(
            product_id=raw.get("product_id", raw.get("productId")),
            quantity=raw.get("quantity"),
            price=raw.get("price"),
        )


@dataclass(frozen=True)
class CreateOrderRequest:
    """Input: a checkout submission."""

    customer_details: CustomerDetails | None
    delivery_address: DeliveryAddress | None
    items: list[OrderItemSpec]
    payment_method: str
    notes: str = ""
    customer_id: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> CreateOrderRequest:
        raw = _require_mapping(raw, "Order")
        customer = raw.get("customer_details", raw.get("customerDetails"))
        address = raw.get("delivery_address", raw.get("deliveryAddress"))
        if customer:
            customer = CustomerDetails.from_dict(_require_mapping(customer, "Customer details"))
        if address:
            address = DeliveryAddress.from_dict(_require_mapping(address, "Delivery address"))
        return cls(
            customer_details=customer or None,
            delivery_address=address or None,
            items=[OrderItemSpec.from_dict(i) for i in raw.get("items") or []],
            payment_method=raw.get("payment_method", raw.get("paymentMethod")),
            notes=raw.get("notes") or "",
            customer_id=raw.get("customer_id", raw.get("customerId")),
        )


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    name: str
    quantity: int
    price: int
    price_display: str  # formatted, e.g. "R250.00"
    total: int
    total_display: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    reference_number: str
    customer_name: str
    email: str
    status: str
    payment_status: str
    payment_method: str
    items: list[OrderLineItemDTO]
    subtotal: int
    subtotal_display: str
    delivery_fee: int
    delivery_fee_display: str
    total: int
    total_display: str
    notes: str
    created_at: str
    updated_at: str
    delivery_address: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_order(cls, order: Order) -> OrderDTO:
        customer = order.customer_details
        return cls(
            id=order.id,
            reference_number=order.reference_number,
            customer_name=f"{customer.first_name} {customer.last_name}",
            email=customer.email,
            status=order.status.value,
            payment_status=order.payment_status.value,
            payment_method=order.payment_method.value,
            items=[
                OrderLineItemDTO(
                    product_id=item.product_id,
                    name=item.name,
                    quantity=item.quantity,
                    price=item.price,
                    price_display=format_price(item.price),
                    total=item.total,
                    total_display=format_price(item.total),
                )
                for item in order.items
            ],
            subtotal=order.subtotal,
            subtotal_display=format_price(order.subtotal),
            delivery_fee=order.delivery_fee,
            delivery_fee_display=format_price(order.delivery_fee),
            total=order.total,
            total_display=format_price(order.total),
            notes=order.notes,
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            updated_at=order.updated_at.strftime("%Y-%m-%d %H:%M UTC"),
            delivery_address=order.delivery_address.to_dict(),
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    category: str
    price: int
    price_display: str
    badge: str
    items: list[str]
    is_active: bool

    @classmethod
    def from_product(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            name=product.name,
            category=product.category.value,
            price=product.price,
            price_display=product.formatted_price,
            badge=product.badge,
            items=list(product.items),
            is_active=product.is_active,
        )
