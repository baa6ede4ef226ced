"""Application service: List a user's orders (query), newest first."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, OrderPageDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.repository.unit_of_work import UnitOfWork

DEFAULT_PER_PAGE = 15
MAX_PER_PAGE = 100


class ListUserOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> OrderPageDTO:
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if not 1 <= per_page <= MAX_PER_PAGE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PER_PAGE}")

        with self._uow as uow:
            orders = uow.orders.list_by_user(user_id, limit=per_page, offset=(page - 1) * per_page)
            total = uow.orders.count_by_user(user_id)

        return OrderPageDTO(
            items=[OrderDTO.from_order(order) for order in orders],
            page=page,
            per_page=per_page,
            total=total,
        )
