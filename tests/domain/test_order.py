"""Unit tests for the Order aggregate and its status state machine."""

import re
from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import (
    EmptyCartError,
    InvalidTransitionError,
    MinimumOrderAmountError,
    ValidationError,
)
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.order import (
    MAX_LINE_ITEMS,
    TRANSITIONS,
    Order,
    OrderStatus,
    can_transition,
    generate_order_number,
)
from storefront.domain.model.value_objects import Money, Quantity

S = OrderStatus

# Every legal edge; all other ordered pairs are illegal.
ALLOWED = {
    (S.PENDING, S.CONFIRMED),
    (S.PENDING, S.CANCELLED),
    (S.CONFIRMED, S.PROCESSING),
    (S.CONFIRMED, S.CANCELLED),
    (S.PROCESSING, S.SHIPPED),
    (S.PROCESSING, S.CANCELLED),
    (S.SHIPPED, S.DELIVERED),
    (S.DELIVERED, S.REFUNDED),
    (S.CANCELLED, S.REFUNDED),
}

ALL_PAIRS = [(current, target) for current in OrderStatus for target in OrderStatus]


def _cart(*lines: tuple[str, int, int]) -> Cart:
    """Build a cart from (product_id, qty, unit price in cents) tuples."""
    return Cart(
        id="cart-1",
        user_id="user-1",
        items=[
            CartItem(
                product_id=pid,
                product_name=f"Product {pid}",
                quantity=Quantity(qty),
                unit_price=Money(price),
            )
            for pid, qty, price in lines
        ],
    )


def _order(status: OrderStatus = OrderStatus.PENDING) -> Order:
    order = Order.create_from_cart("user-1", _cart(("a", 1, 5000)), "1 Long Street, Springfield")
    order.status = status
    return order


class TestTransitionTable:

    def test_has_49_pairs(self):
        assert len(ALL_PAIRS) == 49

    @pytest.mark.parametrize("current,target", ALL_PAIRS)
    def test_every_pair(self, current, target):
        expected = (current, target) in ALLOWED
        assert can_transition(current, target) is expected
        assert current.can_transition_to(target) is expected

    @pytest.mark.parametrize("status", list(OrderStatus))
    def test_no_self_transitions(self, status):
        assert not can_transition(status, status)

    def test_refunded_is_terminal(self):
        assert OrderStatus.REFUNDED.is_terminal
        assert TRANSITIONS[OrderStatus.REFUNDED] == frozenset()

    def test_only_refunded_is_terminal(self):
        assert [s for s in OrderStatus if s.is_terminal] == [OrderStatus.REFUNDED]

    def test_table_covers_every_status(self):
        assert set(TRANSITIONS) == set(OrderStatus)


class TestOrderStatus:

    def test_label(self):
        assert OrderStatus.PENDING.label == "Pending"

    def test_parse_value(self):
        assert OrderStatus.parse(" Shipped ") == OrderStatus.SHIPPED

    def test_parse_member(self):
        assert OrderStatus.parse(OrderStatus.DELIVERED) is OrderStatus.DELIVERED

    def test_parse_unknown(self):
        with pytest.raises(ValidationError, match="Invalid order status"):
            OrderStatus.parse("lost")


class TestCreateFromCart:

    def test_happy_path(self):
        order = Order.create_from_cart(
            "user-1", _cart(("a", 3, 10000), ("b", 2, 15000)), "1 Long Street, Springfield",
            notes="Leave at door",
        )
        assert order.status == OrderStatus.PENDING
        assert order.user_id == "user-1"
        assert order.notes == "Leave at door"
        assert [item.product_id for item in order.items] == ["a", "b"]

    def test_total_is_sum_of_line_totals(self):
        order = Order.create_from_cart(
            "user-1", _cart(("a", 3, 10000), ("b", 2, 15000)), "1 Long Street, Springfield"
        )
        assert order.total_amount == Money(60000)
        assert order.total_amount == order.items_total
        for item in order.items:
            assert item.total_price == item.unit_price * item.quantity.value

    def test_items_snapshot_cart_prices(self):
        order = Order.create_from_cart("user-1", _cart(("a", 1, 999)), "1 Long Street, Springfield")
        assert order.items[0].unit_price == Money(999)
        assert order.items[0].product_name == "Product a"

    def test_empty_cart_rejected(self):
        with pytest.raises(EmptyCartError):
            Order.create_from_cart("user-1", _cart(), "1 Long Street, Springfield")

    def test_too_many_lines_rejected(self):
        lines = [(str(i), 1, 100) for i in range(MAX_LINE_ITEMS + 1)]
        with pytest.raises(ValidationError, match=f"Maximum {MAX_LINE_ITEMS} items"):
            Order.create_from_cart("user-1", _cart(*lines), "1 Long Street, Springfield")

    def test_below_minimum_rejected(self):
        with pytest.raises(MinimumOrderAmountError) as exc_info:
            Order.create_from_cart(
                "user-1", _cart(("a", 1, 500)), "1 Long Street, Springfield",
                minimum_total=Money(1000),
            )
        assert str(exc_info.value) == (
            "Order total $5.00 is below the minimum order amount of $10.00"
        )

    def test_exactly_minimum_accepted(self):
        order = Order.create_from_cart(
            "user-1", _cart(("a", 1, 1000)), "1 Long Street, Springfield",
            minimum_total=Money(1000),
        )
        assert order.total_amount == Money(1000)

    def test_unique_ids_and_numbers(self):
        first = _order()
        second = _order()
        assert first.id != second.id
        assert first.order_number != second.order_number


class TestOrderNumber:

    def test_format(self):
        number = generate_order_number(datetime(2025, 8, 20, tzinfo=timezone.utc))
        assert re.fullmatch(r"ORD-20250820-[0-9A-F]{8}", number)


class TestTransitionTo:

    def test_legal_transition(self):
        order = _order()
        at = datetime(2025, 1, 2, tzinfo=timezone.utc)
        previous = order.transition_to(OrderStatus.CONFIRMED, at=at)
        assert previous == OrderStatus.PENDING
        assert order.status == OrderStatus.CONFIRMED
        assert order.updated_at == at

    def test_illegal_transition_leaves_order_untouched(self):
        order = _order(OrderStatus.DELIVERED)
        updated_at = order.updated_at
        with pytest.raises(InvalidTransitionError, match="Cannot transition from delivered to processing"):
            order.transition_to(OrderStatus.PROCESSING)
        assert order.status == OrderStatus.DELIVERED
        assert order.updated_at == updated_at

    def test_error_carries_both_statuses(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            _order(OrderStatus.REFUNDED).transition_to(OrderStatus.PENDING)
        assert exc_info.value.current == OrderStatus.REFUNDED
        assert exc_info.value.target == OrderStatus.PENDING

    def test_full_happy_lifecycle(self):
        order = _order()
        for status in (S.CONFIRMED, S.PROCESSING, S.SHIPPED, S.DELIVERED, S.REFUNDED):
            order.transition_to(status)
        assert order.status == OrderStatus.REFUNDED

    def test_cannot_cancel_after_shipping(self):
        with pytest.raises(InvalidTransitionError):
            _order(OrderStatus.SHIPPED).transition_to(OrderStatus.CANCELLED)

    def test_error_accepts_plain_status_values(self):
        error = InvalidTransitionError("pending", OrderStatus.SHIPPED)
        assert str(error) == "Cannot transition from pending to shipped"
        assert error.current == "pending"


class TestSoftDelete:

    def test_is_deleted(self):
        order = _order()
        assert not order.is_deleted
        order.deleted_at = datetime.now(timezone.utc)
        assert order.is_deleted
