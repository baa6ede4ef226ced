"""Application service: Create Order From Cart use case.

Turns the user's cart into a pending order inside a single unit of work:

1. Load (or lazily create) the cart; an empty cart, or one below the
   configured minimum order amount, is rejected.
2. Re-check every line against current product stock (first failure wins).
3. Build the order from the cart's price snapshots and persist it.
4. Decrement stock with atomic conditional updates.
5. Record the initial status history entry and empty the cart.
6. Commit, then reload the order for the response.

Any error before the commit rolls everything back: no order, no stock
change, cart untouched.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderCreateData, OrderDTO
from storefront.domain.exceptions import EmptyCartError, StorageError
from storefront.domain.model.order import Order, ensure_minimum_total
from storefront.domain.model.status_history import OrderStatusHistory
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = structlog.get_logger(__name__)


class CreateOrderFromCartHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        minimum_order_amount: Money | None = None,
    ) -> None:
        self._uow = uow
        self._minimum_order_amount = minimum_order_amount

    def handle(self, user_id: str, order_data: OrderCreateData) -> OrderDTO:
        """Place an order for everything in the user's cart."""
        data = order_data.validated()

        with self._uow as uow:
            cart = uow.carts.get_or_create(user_id)
            if cart.is_empty:
                logger.info("Order rejected, cart is empty", user_id=user_id)
                raise EmptyCartError()
            ensure_minimum_total(cart.total_amount, self._minimum_order_amount)

            stock = StockReservationService(uow.products)
            stock.validate_cart(cart)

            order = Order.create_from_cart(
                user_id=user_id,
                cart=cart,
                shipping_address=data.shipping_address,
                notes=data.notes,
            )
            uow.orders.save(order)
            stock.reserve_items(order.items)
            uow.status_history.append(
                OrderStatusHistory.for_order_created(order, changed_by=user_id)
            )
            uow.carts.clear_items(cart.id)
            uow.commit()

            saved = uow.orders.get_by_id(order.id)
            if saved is None:
                raise StorageError(f"Order {order.id} was committed but could not be reloaded")

        logger.info(
            "Order created",
            order_id=saved.id,
            order_number=saved.order_number,
            user_id=user_id,
            item_count=len(saved.items),
            total_amount=saved.total_amount.amount,
        )
        return OrderDTO.from_order(saved)
