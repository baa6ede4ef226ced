"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.database import execute, flush, get_row
from storefront.infrastructure.persistence.tables import ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        # populate_existing: always return what the database holds now,
        # not an earlier copy from the session's identity map.
        row = get_row(self._session, ProductRow, product_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Product | None:
        row = execute(
            self._session,
            select(ProductRow)
            .where(func.lower(ProductRow.name) == name.strip().lower())
            .execution_options(populate_existing=True)
        ).scalars().first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        rows = execute(self._session, select(ProductRow).order_by(ProductRow.name))
        return [self._to_domain(row) for row in rows.scalars()]

    def save(self, product: Product) -> None:
        row = get_row(self._session, ProductRow, product.id, populate_existing=True)
        if row is None:
            # Stock is written once here; afterwards only through
            # decrement_stock and set_stock.
            row = ProductRow(id=product.id, stock_quantity=product.stock_quantity)
            self._session.add(row)
        row.name = product.name
        row.price = product.price.amount
        row.currency = product.price.currency
        flush(self._session)

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        # Identity map is left alone; reads use populate_existing.
        result = execute(
            self._session,
            update(ProductRow)
            .where(ProductRow.id == product_id)
            .where(ProductRow.stock_quantity >= quantity)
            .values(stock_quantity=ProductRow.stock_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def set_stock(self, product_id: str, quantity: int) -> None:
        execute(
            self._session,
            update(ProductRow)
            .where(ProductRow.id == product_id)
            .values(stock_quantity=quantity)
            .execution_options(synchronize_session=False)
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=Money(row.price, row.currency),
            stock_quantity=row.stock_quantity,
        )
