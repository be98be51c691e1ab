"""Value Objects shared across the domain.

Money is kept as a plain ``int`` of minor units (cents) everywhere; this
module only owns the formatting rule. Value Objects are immutable and
compared by value, not identity.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from storefront.domain.exceptions import InvalidQuantityError

CURRENCY_SYMBOL = "R"

# R50.00 flat delivery fee, in cents
DELIVERY_FEE = 5000

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

INTEGER_PATTERN = re.compile(r"-?[0-9]+")


def format_price(cents: int) -> str:
    """Format minor units for display: ``25000 -> "R250.00"``.

    Integer division only; a float never touches the amount.
    """
    sign = "-" if cents < 0 else ""
    rands, remainder = divmod(abs(cents), 100)
    return f"{sign}{CURRENCY_SYMBOL}{rands}.{remainder:02d}"


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


@dataclass(frozen=True)
class Quantity:
    """An order line quantity between ``MIN`` and ``MAX`` inclusive."""

    MIN = 1
    MAX = 50

    value: int

    @classmethod
    def parse(cls, raw: Any, product_name: str) -> Quantity:
        """Coerce a client-submitted quantity.

        Accepts ints and integer strings ("3", " 3 "). Anything else, or
        anything outside the allowed range, raises InvalidQuantityError.
        """
        if isinstance(raw, bool):
            raise InvalidQuantityError(product_name, raw)
        if isinstance(raw, int):
            value = raw
        elif isinstance(raw, float) and raw.is_integer():
            value = int(raw)
        elif isinstance(raw, str):
            text = raw.strip()
            if not INTEGER_PATTERN.fullmatch(text):
                raise InvalidQuantityError(product_name, raw)
            value = int(text)
        else:
            raise InvalidQuantityError(product_name, raw)

        if not cls.MIN <= value <= cls.MAX:
            raise InvalidQuantityError(product_name, raw)
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CustomerDetails:
    first_name: str
    last_name: str
    email: str
    phone: str

    def violations(self) -> list[str]:
        errors: list[str] = []
        if len(_text(self.first_name)) < 2:
            errors.append("First name must be at least 2 characters")
        if len(_text(self.last_name)) < 2:
            errors.append("Last name must be at least 2 characters")
        if not isinstance(self.email, str) or not EMAIL_PATTERN.match(self.email):
            errors.append("Valid email is required")
        if len(_text(self.phone)) < 10:
            errors.append("Valid phone number is required")
        return errors

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> CustomerDetails:
        """Build from snake_case or camelCase keys; missing keys become ""."""
        return cls(
            first_name=raw.get("first_name", raw.get("firstName", "")),
            last_name=raw.get("last_name", raw.get("lastName", "")),
            email=raw.get("email", ""),
            phone=raw.get("phone", ""),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
        }


@dataclass(frozen=True)
class DeliveryAddress:
    street: str
    city: str
    province: str
    postal_code: str

    def violations(self) -> list[str]:
        errors: list[str] = []
        if not _text(self.street):
            errors.append("Street address is required")
        if not _text(self.city):
            errors.append("City is required")
        if not _text(self.province):
            errors.append("Province is required")
        if not _text(self.postal_code):
            errors.append("Postal code is required")
        return errors

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> DeliveryAddress:
        return cls(
            street=raw.get("street", ""),
            city=raw.get("city", ""),
            province=raw.get("province", ""),
            postal_code=raw.get("postal_code", raw.get("postalCode", "")),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "street": self.street,
            "city": self.city,
            "province": self.province,
            "postal_code": self.postal_code,
        }
