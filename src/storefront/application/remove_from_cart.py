"""Application service: Remove From Cart and Clear Cart use cases."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.lookup import find_product
from storefront.domain.repository.unit_of_work import UnitOfWork


class RemoveFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, product_ref: str) -> CartDTO:
        with self._uow as uow:
            cart = uow.carts.get_or_create(user_id)
            product = find_product(uow.products, product_ref)
            uow.carts.remove_item(cart.id, product.id)
            uow.commit()
            cart = uow.carts.get_or_create(user_id)
        return CartDTO.from_cart(cart)


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> None:
        """Remove every item; the cart itself is kept for later use."""
        with self._uow as uow:
            cart = uow.carts.get_or_create(user_id)
            uow.carts.clear_items(cart.id)
            uow.commit()
