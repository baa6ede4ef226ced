"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI (or any other caller) and the
application layer without exposing domain internals.  Amounts are
integers in minor currency units; the ``*_display`` fields carry the
same amount formatted for people.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.status_history import OrderStatusHistory

SHIPPING_ADDRESS_MIN_LENGTH = 10
SHIPPING_ADDRESS_MAX_LENGTH = 500
NOTES_MAX_LENGTH = 1000


def _format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%Y-%m-%d %H:%M UTC")


@dataclass(frozen=True)
class OrderCreateData:
    """Input: what the customer submitted at checkout."""

    shipping_address: str
    notes: str | None = None

    def validated(self) -> OrderCreateData:
        """Return a normalized copy, or raise ValidationError."""
        address = (self.shipping_address or "").strip()
        if not address:
            raise ValidationError("Shipping address is required")
        if len(address) < SHIPPING_ADDRESS_MIN_LENGTH:
            raise ValidationError(
                f"Shipping address must be at least {SHIPPING_ADDRESS_MIN_LENGTH} characters"
            )
        if len(address) > SHIPPING_ADDRESS_MAX_LENGTH:
            raise ValidationError(
                f"Shipping address cannot exceed {SHIPPING_ADDRESS_MAX_LENGTH} characters"
            )

        notes = self.notes.strip() if self.notes else None
        if notes and len(notes) > NOTES_MAX_LENGTH:
            raise ValidationError(f"Notes cannot exceed {NOTES_MAX_LENGTH} characters")

        return OrderCreateData(shipping_address=address, notes=notes or None)


@dataclass(frozen=True)
class OrderItemDTO:

    product_id: str
    product_name: str
    quantity: int
    unit_price: int
    total_price: int
    unit_price_display: str
    total_price_display: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as returned to callers."""

    id: str
    order_number: str
    user_id: str
    status: str
    status_label: str
    total_amount: int
    total_display: str
    currency: str
    shipping_address: str
    notes: str | None
    items: list[OrderItemDTO]
    created_at: str
    shipped_at: str | None
    delivered_at: str | None

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            order_number=order.order_number,
            user_id=order.user_id,
            status=order.status.value,
            status_label=order.status.label,
            total_amount=order.total_amount.amount,
            total_display=str(order.total_amount),
            currency=order.total_amount.currency,
            shipping_address=order.shipping_address,
            notes=order.notes,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    total_price=item.total_price.amount,
                    unit_price_display=str(item.unit_price),
                    total_price_display=str(item.total_price),
                )
                for item in order.items
            ],
            created_at=_format_timestamp(order.created_at),
            shipped_at=_format_timestamp(order.shipped_at),
            delivered_at=_format_timestamp(order.delivered_at),
        )


@dataclass(frozen=True)
class StatusHistoryEntryDTO:

    old_status: str | None
    new_status: str
    changed_by: str | None
    notes: str | None
    at: str

    @staticmethod
    def from_entry(entry: OrderStatusHistory) -> StatusHistoryEntryDTO:
        return StatusHistoryEntryDTO(
            old_status=entry.old_status.value if entry.old_status else None,
            new_status=entry.new_status.value,
            changed_by=entry.changed_by,
            notes=entry.notes,
            at=_format_timestamp(entry.created_at),
        )


@dataclass(frozen=True)
class OrderPageDTO:

    items: list[OrderDTO]
    page: int
    per_page: int
    total: int


@dataclass(frozen=True)
class OrderStatisticsDTO:

    total: int
    by_status: dict[str, int]


@dataclass(frozen=True)
class CartItemDTO:

    product_id: str
    product_name: str
    quantity: int
    unit_price: int
    total_price: int
    unit_price_display: str
    total_price_display: str


@dataclass(frozen=True)
class CartDTO:

    user_id: str
    items: list[CartItemDTO]
    total_items: int
    total_amount: int
    total_display: str

    @staticmethod
    def from_cart(cart: Cart) -> CartDTO:
        return CartDTO(
            user_id=cart.user_id,
            items=[
                CartItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    total_price=item.total_price.amount,
                    unit_price_display=str(item.unit_price),
                    total_price_display=str(item.total_price),
                )
                for item in cart.items
            ],
            total_items=cart.total_items,
            total_amount=cart.total_amount.amount,
            total_display=str(cart.total_amount),
        )
