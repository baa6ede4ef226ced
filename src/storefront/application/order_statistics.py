"""Application service: Order statistics for the admin dashboard (query)."""

from __future__ import annotations

from storefront.application.dto import OrderStatisticsDTO
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.unit_of_work import UnitOfWork


class OrderStatisticsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> OrderStatisticsDTO:
        with self._uow as uow:
            counts = uow.orders.count_by_status()

        # Every status is reported, including the ones with no orders.
        by_status = {status.value: counts.get(status, 0) for status in OrderStatus}
        return OrderStatisticsDTO(total=sum(by_status.values()), by_status=by_status)
