"""Application service: Show an order's status history (query)."""

from __future__ import annotations

from storefront.application.dto import StatusHistoryEntryDTO
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowStatusHistoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str) -> list[StatusHistoryEntryDTO]:
        """Return the order's status changes, oldest first."""
        with self._uow as uow:
            if uow.orders.get_by_id(order_id) is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")
            entries = uow.status_history.list_for_order(order_id)
        return [StatusHistoryEntryDTO.from_entry(entry) for entry in entries]
