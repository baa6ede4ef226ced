"""SQLAlchemy implementation of CartRepository."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.database import execute, flush
from storefront.infrastructure.persistence.tables import CartItemRow, CartRow


class SqlCartRepository(CartRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CartRepository interface ---------------------------------------------

    def get_or_create(self, user_id: str) -> Cart:
        row = execute(
            self._session,
            select(CartRow)
            .where(CartRow.user_id == user_id)
            .options(selectinload(CartRow.items).joinedload(CartItemRow.product))
            .execution_options(populate_existing=True)
        ).scalars().one_or_none()

        if row is None:
            row = CartRow(
                id=str(uuid.uuid4()),
                user_id=user_id,
                created_at=datetime.now(timezone.utc),
            )
            self._session.add(row)
            flush(self._session)
            return Cart(id=row.id, user_id=user_id, items=[])

        return Cart(
            id=row.id,
            user_id=row.user_id,
            items=[self._item_to_domain(item) for item in row.items],
        )

    def get_item(self, cart_id: str, product_id: str) -> CartItem | None:
        row = self._find_item_row(cart_id, product_id)
        return self._item_to_domain(row) if row is not None else None

    def upsert_item(
        self, cart_id: str, product_id: str, quantity: int, unit_price: Money
    ) -> None:
        row = self._find_item_row(cart_id, product_id)
        if row is None:
            row = CartItemRow(cart_id=cart_id, product_id=product_id, quantity=0)
            self._session.add(row)
        row.quantity += quantity
        row.unit_price = unit_price.amount
        row.currency = unit_price.currency
        flush(self._session)

    def update_item_quantity(self, cart_id: str, product_id: str, quantity: int) -> None:
        row = self._find_item_row(cart_id, product_id)
        if row is not None:
            row.quantity = quantity
            flush(self._session)

    def remove_item(self, cart_id: str, product_id: str) -> None:
        execute(
            self._session,
            delete(CartItemRow)
            .where(CartItemRow.cart_id == cart_id)
            .where(CartItemRow.product_id == product_id)
        )

    def clear_items(self, cart_id: str) -> None:
        execute(self._session, delete(CartItemRow).where(CartItemRow.cart_id == cart_id))

    # --- Helpers --------------------------------------------------------------

    def _find_item_row(self, cart_id: str, product_id: str) -> CartItemRow | None:
        return execute(
            self._session,
            select(CartItemRow)
            .where(CartItemRow.cart_id == cart_id)
            .where(CartItemRow.product_id == product_id)
        ).scalars().one_or_none()

    @staticmethod
    def _item_to_domain(row: CartItemRow) -> CartItem:
        return CartItem(
            product_id=row.product_id,
            product_name=row.product.name,
            quantity=Quantity(row.quantity),
            unit_price=Money(row.unit_price, row.currency),
        )
