"""Integration tests for the UpdateOrderStatus and status history use cases."""

import pytest

from storefront.application.show_status_history import ShowStatusHistoryHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InvalidTransitionError,
    StorageError,
    ValidationError,
)
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeUnitOfWork


def _setup(status: OrderStatus = OrderStatus.PENDING) -> tuple[FakeUnitOfWork, Order]:
    cart = Cart(id="c", user_id="user-1", items=[
        CartItem("p-1", "Widget", Quantity(2), Money(1500)),
    ])
    order = Order.create_from_cart("user-1", cart, "221B Baker Street, London")
    order.status = status
    uow = FakeUnitOfWork()
    uow.orders.save(order)
    return uow, order


class TestUpdateStatus:

    def test_pending_to_confirmed(self):
        uow, order = _setup()

        dto = UpdateOrderStatusHandler(uow).handle(order.id, "confirmed", actor_id="admin-1")

        assert dto.status == "confirmed"
        assert uow.orders.get_by_id(order.id).status == OrderStatus.CONFIRMED
        entries = uow.status_history.list_for_order(order.id)
        assert len(entries) == 1
        assert entries[0].old_status == OrderStatus.PENDING
        assert entries[0].new_status == OrderStatus.CONFIRMED
        assert entries[0].changed_by == "admin-1"
        assert entries[0].notes == "Status updated"
        assert uow.commits == 1

    def test_accepts_enum_member(self):
        uow, order = _setup()
        dto = UpdateOrderStatusHandler(uow).handle(order.id, OrderStatus.CANCELLED)
        assert dto.status == "cancelled"

    def test_system_change_has_no_actor(self):
        uow, order = _setup()
        UpdateOrderStatusHandler(uow).handle(order.id, "confirmed", notes="Payment received")
        entry = uow.status_history.list_for_order(order.id)[0]
        assert entry.changed_by is None
        assert entry.notes == "Payment received"

    def test_shipping_stamps_shipped_at(self):
        uow, order = _setup(OrderStatus.PROCESSING)

        dto = UpdateOrderStatusHandler(uow).handle(order.id, "shipped")

        saved = uow.orders.get_by_id(order.id)
        assert saved.shipped_at is not None
        assert saved.delivered_at is None
        assert dto.shipped_at is not None

    def test_delivery_stamps_delivered_at(self):
        uow, order = _setup(OrderStatus.SHIPPED)

        UpdateOrderStatusHandler(uow).handle(order.id, "delivered")

        assert uow.orders.get_by_id(order.id).delivered_at is not None

    def test_one_history_entry_per_change(self):
        uow, order = _setup()
        handler = UpdateOrderStatusHandler(uow)
        for target in ("confirmed", "processing", "shipped", "delivered", "refunded"):
            handler.handle(order.id, target)

        entries = uow.status_history.list_for_order(order.id)
        assert [(e.old_status.value, e.new_status.value) for e in entries] == [
            ("pending", "confirmed"),
            ("confirmed", "processing"),
            ("processing", "shipped"),
            ("shipped", "delivered"),
            ("delivered", "refunded"),
        ]


class TestUpdateStatusRejections:

    def test_delivered_to_processing(self):
        uow, order = _setup(OrderStatus.DELIVERED)

        with pytest.raises(InvalidTransitionError) as exc_info:
            UpdateOrderStatusHandler(uow).handle(order.id, "processing")

        assert str(exc_info.value) == "Cannot transition from delivered to processing"
        assert uow.orders.get_by_id(order.id).status == OrderStatus.DELIVERED
        assert uow.status_history.all() == []
        assert uow.commits == 0

    def test_refunded_is_final(self):
        uow, order = _setup(OrderStatus.REFUNDED)
        for target in OrderStatus:
            with pytest.raises(InvalidTransitionError):
                UpdateOrderStatusHandler(uow).handle(order.id, target)
        assert uow.status_history.all() == []

    def test_same_status_rejected(self):
        uow, order = _setup(OrderStatus.CONFIRMED)
        with pytest.raises(InvalidTransitionError, match="from confirmed to confirmed"):
            UpdateOrderStatusHandler(uow).handle(order.id, "confirmed")

    def test_unknown_status(self):
        uow, order = _setup()
        with pytest.raises(ValidationError, match="Invalid order status"):
            UpdateOrderStatusHandler(uow).handle(order.id, "teleported")

    def test_unknown_order(self):
        uow, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateOrderStatusHandler(uow).handle("missing", "confirmed")

    def test_failed_save_writes_no_history(self):
        uow, order = _setup()
        uow.orders.save_error = StorageError("connection lost")

        with pytest.raises(StorageError):
            UpdateOrderStatusHandler(uow).handle(order.id, "confirmed")

        assert uow.status_history.all() == []
        assert uow.orders.get_by_id(order.id).status == OrderStatus.PENDING
        assert uow.commits == 0


class TestCanTransition:

    def test_accepts_strings(self):
        assert UpdateOrderStatusHandler.can_transition("pending", "confirmed")
        assert not UpdateOrderStatusHandler.can_transition("shipped", "cancelled")

    def test_accepts_members(self):
        assert UpdateOrderStatusHandler.can_transition(OrderStatus.CANCELLED, OrderStatus.REFUNDED)


class TestShowStatusHistory:

    def test_lists_entries_oldest_first(self):
        uow, order = _setup()
        handler = UpdateOrderStatusHandler(uow)
        handler.handle(order.id, "confirmed", actor_id="admin-1")
        handler.handle(order.id, "cancelled", actor_id="user-1", notes="Changed my mind")

        entries = ShowStatusHistoryHandler(uow).handle(order.id)

        assert [(e.old_status, e.new_status) for e in entries] == [
            ("pending", "confirmed"),
            ("confirmed", "cancelled"),
        ]
        assert entries[1].changed_by == "user-1"
        assert entries[1].notes == "Changed my mind"
        assert entries[0].at.endswith("UTC")

    def test_unknown_order(self):
        uow, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowStatusHistoryHandler(uow).handle("missing")
