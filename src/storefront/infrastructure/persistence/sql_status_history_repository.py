"""SQLAlchemy implementation of OrderStatusHistoryRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.domain.model.order import OrderStatus
from storefront.domain.model.status_history import OrderStatusHistory
from storefront.domain.repository.status_history_repository import (
    OrderStatusHistoryRepository,
)
from storefront.infrastructure.persistence.database import as_utc, execute, flush
from storefront.infrastructure.persistence.tables import OrderStatusHistoryRow


class SqlOrderStatusHistoryRepository(OrderStatusHistoryRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def append(self, entry: OrderStatusHistory) -> None:
        # Timestamps can tie; the per-order sequence keeps the order stable.
        last = execute(
            self._session,
            select(func.max(OrderStatusHistoryRow.sequence)).where(
                OrderStatusHistoryRow.order_id == entry.order_id
            )
        ).scalar()
        self._session.add(
            OrderStatusHistoryRow(
                id=entry.id,
                order_id=entry.order_id,
                sequence=(last or 0) + 1,
                old_status=entry.old_status.value if entry.old_status else None,
                new_status=entry.new_status.value,
                changed_by=entry.changed_by,
                notes=entry.notes,
                created_at=entry.created_at,
            )
        )
        flush(self._session)

    def list_for_order(self, order_id: str) -> list[OrderStatusHistory]:
        rows = execute(
            self._session,
            select(OrderStatusHistoryRow)
            .where(OrderStatusHistoryRow.order_id == order_id)
            .order_by(OrderStatusHistoryRow.sequence)
        ).scalars()
        return [
            OrderStatusHistory(
                id=row.id,
                order_id=row.order_id,
                old_status=OrderStatus(row.old_status) if row.old_status else None,
                new_status=OrderStatus(row.new_status),
                changed_by=row.changed_by,
                notes=row.notes,
                created_at=as_utc(row.created_at),
            )
            for row in rows
        ]
