"""Abstract repository for the append-only order status history."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.status_history import OrderStatusHistory


class OrderStatusHistoryRepository(ABC):

    @abstractmethod
    def append(self, entry: OrderStatusHistory) -> None:
        """Store a new history record. Existing records are never touched."""

    @abstractmethod
    def list_for_order(self, order_id: str) -> list[OrderStatusHistory]:
        """Return an order's history, oldest first."""
