"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def save(self, order: Order) -> None:
        """Insert a new order with its items, or persist the lifecycle
        fields (status, timestamps, soft delete) of an existing one.

        Line items are never rewritten after the first save.
        """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items, or None if missing or deleted."""

    @abstractmethod
    @abstractmethod
    def get_for_update(self, order_id: str) -> Order | None:
        """Like get_by_id, but lock the order row until the unit of work ends.

        Read-then-write changes such as status transitions load through
        this so that concurrent writers queue instead of overwriting.
        """

    def get_by_order_number(self, order_number: str) -> Order | None:
        """Return an order by its human-readable number, or None."""

    @abstractmethod
    def list_by_user(self, user_id: str, limit: int, offset: int = 0) -> list[Order]:
        """Return a user's orders, newest first."""

    @abstractmethod
    def count_by_user(self, user_id: str) -> int:
        """Return how many (non-deleted) orders a user has."""

    @abstractmethod
    def count_by_status(self) -> dict[OrderStatus, int]:
        """Return the number of non-deleted orders per status."""
