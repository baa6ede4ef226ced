"""Application service: Add To Cart use case.

The unit price is snapshotted from the product at this moment; the
customer is later charged that price even if the catalog price changes.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO
from storefront.application.lookup import find_product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, product_ref: str, quantity: int) -> CartDTO:
        qty = Quantity(quantity)

        with self._uow as uow:
            cart = uow.carts.get_or_create(user_id)
            product = find_product(uow.products, product_ref)

            # Validate the requested amount, then the resulting line total.
            product.ensure_available(qty.value)
            existing = cart.find_item(product.id)
            if existing is not None:
                product.ensure_available(existing.quantity.value + qty.value)

            uow.carts.upsert_item(cart.id, product.id, qty.value, product.price)
            uow.commit()
            cart = uow.carts.get_or_create(user_id)

        logger.info(
            "Added to cart",
            user_id=user_id,
            product_id=product.id,
            quantity=qty.value,
        )
        return CartDTO.from_cart(cart)
