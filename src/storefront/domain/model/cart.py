"""Cart aggregate: the per-user staging area for an order.

A cart is created lazily the first time a user's cart is accessed and is
never deleted; placing an order only removes its items.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartItem:
    """A product selection with the price the customer saw when adding it."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # snapshot taken at add-to-cart time

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Cart:

    id: str
    user_id: str
    items: list[CartItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_items(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def total_amount(self) -> Money:
        if not self.items:
            return Money.zero()
        result = Money.zero(self.items[0].unit_price.currency)
        for item in self.items:
            result = result + item.total_price
        return result

    def find_item(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None
