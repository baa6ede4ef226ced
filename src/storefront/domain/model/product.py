"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is replenished and sold.  Orders and cart items
only ever hold snapshots of a product's name and price.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import (
    InsufficientStockError,
    OutOfStockError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock_quantity`` is never negative.  Order placement
    does not mutate this object; it decrements stock through
    ``ProductRepository.decrement_stock`` so concurrent orders cannot
    lose updates.
    """

    id: str
    name: str
    price: Money
    stock_quantity: int = 0

    def __post_init__(self) -> None:
        if self.stock_quantity < 0:
            raise ValidationError(
                f"Stock quantity for {self.name} cannot be negative"
            )

    @property
    def is_in_stock(self) -> bool:
        return self.stock_quantity > 0

    def has_stock(self, requested: int = 1) -> bool:
        return self.stock_quantity >= requested

    def ensure_available(self, requested: int) -> None:
        """Raise if ``requested`` units cannot be sold right now."""
        if not self.is_in_stock:
            raise OutOfStockError(self.name)
        if not self.has_stock(requested):
            raise InsufficientStockError(self.name, requested, self.stock_quantity)

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders or cart items because
        they capture a price snapshot.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        self.stock_quantity = quantity
