"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> CartDTO:
        # get_or_create may insert the cart row, so the work is committed.
        with self._uow as uow:
            cart = uow.carts.get_or_create(user_id)
            uow.commit()
        return CartDTO.from_cart(cart)
