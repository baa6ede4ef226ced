"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its line items.  Line items are
an immutable snapshot taken from the cart; after creation only the
lifecycle fields (status, shipped/delivered timestamps, soft delete)
change, and status changes are governed by the transition table below.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    EmptyCartError,
    InvalidTransitionError,
    MinimumOrderAmountError,
    ValidationError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def allowed_transitions(self) -> frozenset[OrderStatus]:
        return TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self]

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in TRANSITIONS[self]

    @classmethod
    def parse(cls, value: str | OrderStatus) -> OrderStatus:
        if isinstance(value, OrderStatus):
            return value
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            valid = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Invalid order status {value!r}. Expected one of: {valid}"
            ) from None


# ---------------------------------------------------------------------------
# Transition table: forward-only pipeline, cancellation up to processing,
# refunds only after delivery or cancellation.  No self transitions.
# ---------------------------------------------------------------------------
TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.CANCELLED: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.REFUNDED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Pure lookup in the transition table."""
    return target in TRANSITIONS[current]


@dataclass(frozen=True)
class OrderItem:
    """Captures product name and price at order-creation time."""

    id: str
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50
ORDER_NUMBER_SUFFIX_LENGTH = 8


def generate_order_number(now: datetime | None = None) -> str:
    """Human readable order number, e.g. ``ORD-20250820-1A2B3C4D``."""
    now = now or datetime.now(timezone.utc)
    suffix = uuid.uuid4().hex[:ORDER_NUMBER_SUFFIX_LENGTH].upper()
    return f"ORD-{now:%Y%m%d}-{suffix}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_minimum_total(total: Money, minimum: Money | None) -> None:
    """Raise MinimumOrderAmountError when a minimum is set and not reached."""
    if minimum is not None and total < minimum:
        raise MinimumOrderAmountError(total, minimum)


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use ``Order.create_from_cart()`` for new orders; it enforces all
    creation rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str
    order_number: str
    user_id: str
    items: list[OrderItem]
    shipping_address: str
    total_amount: Money
    notes: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create_from_cart(
        user_id: str,
        cart: Cart,
        shipping_address: str,
        notes: str | None = None,
        minimum_total: Money | None = None,
    ) -> Order:
        """Create a pending order from the cart's items and price snapshots.

        Stock is not checked here; that needs the product repository and
        is the job of ``StockReservationService``.
        """
        if cart.is_empty:
            raise EmptyCartError()

        if len(cart.items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        total = cart.total_amount
        ensure_minimum_total(total, minimum_total)

        now = _utcnow()
        items = [
            OrderItem(
                id=str(uuid.uuid4()),
                product_id=cart_item.product_id,
                product_name=cart_item.product_name,
                quantity=cart_item.quantity,
                unit_price=cart_item.unit_price,
            )
            for cart_item in cart.items
        ]
        return Order(
            id=str(uuid.uuid4()),
            order_number=generate_order_number(now),
            user_id=user_id,
            items=items,
            shipping_address=shipping_address,
            total_amount=total,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, target: OrderStatus) -> bool:
        return can_transition(self.status, target)

    def transition_to(self, target: OrderStatus, at: datetime | None = None) -> OrderStatus:
        """Move to ``target`` and return the previous status.

        Raises InvalidTransitionError, leaving the order untouched, when the
        transition table does not allow the move.
        """
        if not can_transition(self.status, target):
            raise InvalidTransitionError(self.status, target)
        previous = self.status
        self.status = target
        self.updated_at = at or _utcnow()
        return previous

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        result = Money.zero(self.total_amount.currency)
        for item in self.items:
            result = result + item.total_price
        return result

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
