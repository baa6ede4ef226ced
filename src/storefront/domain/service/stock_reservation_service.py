"""Domain service: Stock Reservation.

This service coordinates the cross-aggregate work of turning cart lines
into sold stock.  It lives in the domain layer because the rules (which
error wins, what counts as available) are core business rules, not just
orchestration.

The two-phase approach (validate-then-decrement) reports the first
problem in cart order before anything is written.  The decrement phase
still goes through the repository's conditional update, so a concurrent
order that took the stock after validation is caught there; the caller's
unit of work then rolls back every decrement already made.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    OutOfStockError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import OrderItem
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def validate_cart(self, cart: Cart) -> None:
        """Check every cart line against the product's *current* stock.

        Products are re-read from the repository, never taken from the
        cart.  The first failing line in cart order raises; failures are
        not aggregated.
        """
        for item in cart.items:
            product = self._load(item.product_id, item.product_name)
            try:
                product.ensure_available(item.quantity.value)
            except (OutOfStockError, InsufficientStockError):
                logger.info(
                    "Stock check failed",
                    product_id=product.id,
                    product_name=product.name,
                    requested=item.quantity.value,
                    available=product.stock_quantity,
                )
                raise

    def reserve_items(self, items: list[OrderItem]) -> None:
        """Take each item's quantity out of stock with an atomic decrement."""
        for item in items:
            qty = item.quantity.value
            if self._product_repo.decrement_stock(item.product_id, qty):
                continue
            # Lost a race: someone else sold the stock after validation.
            product = self._load(item.product_id, item.product_name)
            logger.warning(
                "Conditional stock decrement rejected",
                product_id=item.product_id,
                requested=qty,
                available=product.stock_quantity,
            )
            raise InsufficientStockError(product.name, qty, product.stock_quantity)

    def _load(self, product_id: str, product_name: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")
        return product
