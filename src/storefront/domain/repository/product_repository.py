"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return the product as currently stored, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new product, or the catalog fields of an existing one.

        Stock is only written on insert; use set_stock or decrement_stock
        to change it afterwards.
        """

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically take ``quantity`` units out of stock.

        Must be a single conditional update ("decrement where stock >=
        quantity"), never a read followed by a write.  Returns False, and
        changes nothing, when fewer than ``quantity`` units remain.
        """

    @abstractmethod
    def set_stock(self, product_id: str, quantity: int) -> None:
        """Overwrite the stored stock level of an existing product."""
