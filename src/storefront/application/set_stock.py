"""Application service: Set Stock use case (restocking / stock take)."""

from __future__ import annotations

import structlog

from storefront.application.lookup import find_product
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class SetStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_ref: str, quantity: int) -> None:
        """Set the absolute stock quantity for a product."""
        with self._uow as uow:
            product = find_product(uow.products, product_ref)
            previous = product.stock_quantity
            product.set_stock(quantity)
            uow.products.set_stock(product.id, product.stock_quantity)
            uow.commit()

        logger.info(
            "Stock level set",
            product_id=product.id,
            previous=previous,
            stock_quantity=quantity,
        )
