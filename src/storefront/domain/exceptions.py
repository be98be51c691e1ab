"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """One or more business rules were violated.

    ``errors`` keeps one message per violated rule so callers can show
    every problem at once instead of the first one found.
    """

    def __init__(self, errors: list[str] | str, subject: str = "Validation") -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(f"{subject} failed: {', '.join(self.errors)}")


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(NotFoundError):
    """An order item references a product that is not in the catalog."""

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class ProductUnavailableError(DomainException):
    """An order item references a product that is no longer for sale."""

    def __init__(self, product_name: str) -> None:
        self.product_name = product_name
        super().__init__(f"Product is no longer available: {product_name}")


class InvalidQuantityError(DomainException):
    def __init__(self, product_name: str, quantity: object) -> None:
        self.product_name = product_name
        self.quantity = quantity
        super().__init__(f"Invalid quantity for {product_name}: {quantity!r}")


class InvalidTransitionError(DomainException):
    """A state machine was asked to move along an edge it does not have."""

    def __init__(self, machine: str, current: str, requested: str) -> None:
        self.machine = machine
        self.current = current
        self.requested = requested
        super().__init__(
            f"Invalid {machine} transition from {current} to {requested}"
        )


class ConstraintViolation(DomainException):
    """The persistence layer rejected a write (e.g. duplicate reference)."""


class ConcurrentUpdateError(ConstraintViolation):
    """The stored row changed between load and conditional update."""
