"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order '{order_id}' not found")
        return OrderDTO.from_order(order)

    def handle_by_number(self, order_number: str) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_order_number(order_number.strip().upper())
        if order is None:
            raise EntityNotFoundError(f"Order {order_number} not found")
        return OrderDTO.from_order(order)
