"""Application service: Update Order Status use case.

The transition rules live in the domain (``OrderStatus`` and its table);
this handler loads the order, applies the move, stamps the fulfilment
timestamps and writes the history record.  The history record is only
appended after the order itself was saved, so a failed save leaves no
trace in the history.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from storefront.domain.model.order import OrderStatus, can_transition
from storefront.domain.model.status_history import OrderStatusHistory
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    @staticmethod
    def can_transition(current: OrderStatus | str, target: OrderStatus | str) -> bool:
        return can_transition(OrderStatus.parse(current), OrderStatus.parse(target))

    def handle(
        self,
        order_id: str,
        target: OrderStatus | str,
        actor_id: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Move an order to ``target``.

        Args:
            order_id: The order to update.
            target: The new status (enum member or its value).
            actor_id: Who made the change; None for system changes.
            notes: Optional note for the history record.
        """
        new_status = OrderStatus.parse(target)

        with self._uow as uow:
            order = uow.orders.get_for_update(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")

            now = datetime.now(timezone.utc)
            try:
                old_status = order.transition_to(new_status, at=now)
            except InvalidTransitionError:
                logger.info(
                    "Status transition rejected",
                    order_id=order_id,
                    current=order.status.value,
                    target=new_status.value,
                )
                raise

            if new_status == OrderStatus.SHIPPED:
                order.shipped_at = now
            elif new_status == OrderStatus.DELIVERED:
                order.delivered_at = now

            uow.orders.save(order)
            uow.status_history.append(
                OrderStatusHistory.for_status_change(
                    order_id=order.id,
                    old_status=old_status,
                    new_status=new_status,
                    changed_by=actor_id,
                    notes=notes,
                    at=now,
                )
            )
            uow.commit()

        logger.info(
            "Order status changed",
            order_id=order.id,
            old_status=old_status.value,
            new_status=new_status.value,
            changed_by=actor_id,
        )
        return OrderDTO.from_order(order)
