"""Unit tests for order status history records."""

from datetime import datetime, timezone

from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.status_history import OrderStatusHistory
from storefront.domain.model.value_objects import Money, Quantity


def _order() -> Order:
    cart = Cart(id="c", user_id="u-1", items=[
        CartItem("p-1", "Widget", Quantity(1), Money(2500)),
    ])
    return Order.create_from_cart("u-1", cart, "1 Long Street, Springfield")


def test_created_record():
    order = _order()
    entry = OrderStatusHistory.for_order_created(order, changed_by="u-1")
    assert entry.order_id == order.id
    assert entry.old_status is None
    assert entry.new_status == OrderStatus.PENDING
    assert entry.changed_by == "u-1"
    assert entry.notes == "Order created"
    assert entry.created_at == order.created_at


def test_status_change_record_defaults():
    entry = OrderStatusHistory.for_status_change(
        "o-1", OrderStatus.PENDING, OrderStatus.CONFIRMED
    )
    assert entry.changed_by is None
    assert entry.notes == "Status updated"
    assert entry.created_at.tzinfo is not None


def test_status_change_record_keeps_actor_and_note():
    at = datetime(2025, 3, 1, tzinfo=timezone.utc)
    entry = OrderStatusHistory.for_status_change(
        "o-1", OrderStatus.PROCESSING, OrderStatus.SHIPPED,
        changed_by="admin-1", notes="Handed to courier", at=at,
    )
    assert entry.old_status == OrderStatus.PROCESSING
    assert entry.new_status == OrderStatus.SHIPPED
    assert entry.changed_by == "admin-1"
    assert entry.notes == "Handed to courier"
    assert entry.created_at == at


def test_records_get_unique_ids():
    a = OrderStatusHistory.for_status_change("o-1", OrderStatus.PENDING, OrderStatus.CONFIRMED)
    b = OrderStatusHistory.for_status_change("o-1", OrderStatus.PENDING, OrderStatus.CONFIRMED)
    assert a.id != b.id
