"""Application service: Update Cart Item quantity use case."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.lookup import find_product
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork


class UpdateCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, product_ref: str, quantity: int) -> CartDTO:
        """Replace the quantity of a product already in the cart."""
        qty = Quantity(quantity)

        with self._uow as uow:
            cart = uow.carts.get_or_create(user_id)
            product = find_product(uow.products, product_ref)
            if cart.find_item(product.id) is None:
                raise EntityNotFoundError(f"'{product.name}' is not in the cart")

            product.ensure_available(qty.value)
            uow.carts.update_item_quantity(cart.id, product.id, qty.value)
            uow.commit()
            cart = uow.carts.get_or_create(user_id)

        return CartDTO.from_cart(cart)
