"""Order status history: append-only audit records.

One record is written when an order is placed and one for every status
change that was actually persisted.  Records are never updated or
deleted.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.model.order import Order, OrderStatus

ORDER_CREATED_NOTE = "Order created"
STATUS_UPDATED_NOTE = "Status updated"


@dataclass(frozen=True)
class OrderStatusHistory:

    id: str
    order_id: str
    old_status: OrderStatus | None
    new_status: OrderStatus
    changed_by: str | None = None  # None for system initiated changes
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def for_order_created(order: Order, changed_by: str | None) -> OrderStatusHistory:
        return OrderStatusHistory(
            id=str(uuid.uuid4()),
            order_id=order.id,
            old_status=None,
            new_status=order.status,
            changed_by=changed_by,
            notes=ORDER_CREATED_NOTE,
            created_at=order.created_at,
        )

    @staticmethod
    def for_status_change(
        order_id: str,
        old_status: OrderStatus,
        new_status: OrderStatus,
        changed_by: str | None = None,
        notes: str | None = None,
        at: datetime | None = None,
    ) -> OrderStatusHistory:
        return OrderStatusHistory(
            id=str(uuid.uuid4()),
            order_id=order_id,
            old_status=old_status,
            new_status=new_status,
            changed_by=changed_by,
            notes=notes or STATUS_UPDATED_NOTE,
            created_at=at or datetime.now(timezone.utc),
        )
