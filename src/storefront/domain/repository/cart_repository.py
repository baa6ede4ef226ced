"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Money


class CartRepository(ABC):

    @abstractmethod
    def get_or_create(self, user_id: str) -> Cart:
        """Return the user's cart with its items, creating an empty one if needed."""

    @abstractmethod
    def get_item(self, cart_id: str, product_id: str) -> CartItem | None:
        """Return the cart line for a product, or None."""

    @abstractmethod
    def upsert_item(
        self, cart_id: str, product_id: str, quantity: int, unit_price: Money
    ) -> None:
        """Add ``quantity`` to the product's line (creating it if missing)
        and refresh its unit price snapshot."""

    @abstractmethod
    def update_item_quantity(self, cart_id: str, product_id: str, quantity: int) -> None:
        """Replace the quantity of an existing line."""

    @abstractmethod
    def remove_item(self, cart_id: str, product_id: str) -> None:
        """Delete the product's line, if present."""

    @abstractmethod
    def clear_items(self, cart_id: str) -> None:
        """Delete every line of the cart; the cart itself is kept."""
