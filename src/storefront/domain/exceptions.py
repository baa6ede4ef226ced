"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each exception keeps the values it was raised with as attributes, so
callers can render their own text instead of parsing the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.domain.model.order import OrderStatus
    from storefront.domain.model.value_objects import Money


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """The storage backend failed to persist or load data."""


class EmptyCartError(DomainException):
    """An order was requested from a cart without items."""

    def __init__(self, message: str = "Cannot create an order from an empty cart") -> None:
        super().__init__(message)


class OutOfStockError(DomainException):
    """A product has no stock left at all."""

    def __init__(self, product_name: str | None = None) -> None:
        self.product_name = product_name
        if product_name:
            message = f"Product '{product_name}' is out of stock"
        else:
            message = "Product is out of stock"
        super().__init__(message)


class InsufficientStockError(DomainException):
    """A product has some stock, but less than requested."""

    def __init__(
        self,
        product_name: str | None = None,
        requested: int | None = None,
        available: int | None = None,
    ) -> None:
        self.product_name = product_name
        self.requested = requested
        self.available = available
        if product_name and requested is not None and available is not None:
            message = (
                f"Insufficient stock for product '{product_name}'. "
                f"Requested: {requested}, Available: {available}"
            )
        else:
            message = "Insufficient stock for requested quantity"
        super().__init__(message)


class MinimumOrderAmountError(DomainException):
    """The cart total does not reach the configured minimum order amount."""

    def __init__(self, total: Money, minimum: Money) -> None:
        self.total = total
        self.minimum = minimum
        super().__init__(
            f"Order total {total} is below the minimum order amount of {minimum}"
        )


class InvalidTransitionError(DomainException):
    """An order status change is not allowed by the transition table.

    Not retryable: it signals a caller logic error, not a transient fault.
    """

    def __init__(self, current: OrderStatus | str, target: OrderStatus | str) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot transition from {_status_value(current)} to {_status_value(target)}"
        )


def _status_value(status: OrderStatus | str) -> str:
    return getattr(status, "value", status)
