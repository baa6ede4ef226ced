"""Abstract unit of work: the transaction boundary of a use case.

Handlers open one unit of work per call::

    with uow:
        ...
        uow.commit()

Leaving the block without calling ``commit()``, or because of an
exception, rolls back everything done through the repositories.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.status_history_repository import (
    OrderStatusHistoryRepository,
)


class UnitOfWork(ABC):

    products: ProductRepository
    carts: CartRepository
    orders: OrderRepository
    status_history: OrderStatusHistoryRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Rolling back after a successful commit is a no-op.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change of this unit of work durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change."""
