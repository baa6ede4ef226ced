"""SQLAlchemy implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.database import (
    as_utc,
    execute,
    flush,
    get_row,
)
from storefront.infrastructure.persistence.tables import OrderItemRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def save(self, order: Order) -> None:
        row = get_row(self._session, OrderRow, order.id)
        if row is None:
            self._session.add(self._to_row(order))
        else:
            # Items are immutable once placed; only lifecycle fields change.
            row.status = order.status.value
            row.shipped_at = order.shipped_at
            row.delivered_at = order.delivered_at
            row.deleted_at = order.deleted_at
            row.updated_at = order.updated_at
        flush(self._session)

    def get_by_id(self, order_id: str) -> Order | None:
        return self._one(select(OrderRow).where(OrderRow.id == order_id))

    def get_for_update(self, order_id: str) -> Order | None:
        # SQLite has no row locks; BEGIN IMMEDIATE already serialises writers.
        return self._one(
            select(OrderRow)
            .where(OrderRow.id == order_id)
            .with_for_update(of=OrderRow)
        )

    def get_by_order_number(self, order_number: str) -> Order | None:
        return self._one(select(OrderRow).where(OrderRow.order_number == order_number))

    def list_by_user(self, user_id: str, limit: int, offset: int = 0) -> list[Order]:
        rows = execute(
            self._session,
            self._visible(select(OrderRow).where(OrderRow.user_id == user_id))
            .order_by(OrderRow.created_at.desc(), OrderRow.order_number.desc())
            .limit(limit)
            .offset(offset)
        ).scalars()
        return [self._to_domain(row) for row in rows]

    def count_by_user(self, user_id: str) -> int:
        return execute(
            self._session,
            select(func.count())
            .select_from(OrderRow)
            .where(OrderRow.user_id == user_id)
            .where(OrderRow.deleted_at.is_(None))
        ).scalar_one()

    def count_by_status(self) -> dict[OrderStatus, int]:
        rows = execute(
            self._session,
            select(OrderRow.status, func.count())
            .where(OrderRow.deleted_at.is_(None))
            .group_by(OrderRow.status)
        )
        return {OrderStatus(status): count for status, count in rows}

    # --- Query helpers --------------------------------------------------------

    @staticmethod
    def _visible(stmt):
        return (
            stmt.where(OrderRow.deleted_at.is_(None))
            .options(selectinload(OrderRow.items))
            .execution_options(populate_existing=True)
        )

    def _one(self, stmt) -> Order | None:
        row = execute(self._session, self._visible(stmt)).scalars().one_or_none()
        return self._to_domain(row) if row is not None else None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        return OrderRow(
            id=order.id,
            order_number=order.order_number,
            user_id=order.user_id,
            status=order.status.value,
            total_amount=order.total_amount.amount,
            currency=order.total_amount.currency,
            shipping_address=order.shipping_address,
            notes=order.notes,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            deleted_at=order.deleted_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemRow(
                    id=item.id,
                    product_id=item.product_id,
                    position=position,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    total_price=item.total_price.amount,
                )
                for position, item in enumerate(order.items)
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        items = [
            OrderItem(
                id=item.id,
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=Quantity(item.quantity),
                unit_price=Money(item.unit_price, row.currency),
            )
            for item in row.items
        ]
        return Order(
            id=row.id,
            order_number=row.order_number,
            user_id=row.user_id,
            items=items,
            shipping_address=row.shipping_address,
            total_amount=Money(row.total_amount, row.currency),
            notes=row.notes,
            status=OrderStatus(row.status),
            shipped_at=as_utc(row.shipped_at),
            delivered_at=as_utc(row.delivered_at),
            deleted_at=as_utc(row.deleted_at),
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
