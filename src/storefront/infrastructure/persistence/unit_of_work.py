"""SQLAlchemy unit of work: one session, one transaction."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from storefront.domain.exceptions import StorageError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from storefront.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from storefront.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)
from storefront.infrastructure.persistence.sql_status_history_repository import (
    SqlOrderStatusHistoryRepository,
)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Opens a fresh session on every ``with`` block.

    A single instance may be reused for consecutive blocks, but not
    nested ones, and not from several threads at once.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlProductRepository(self._session)
        self.carts = SqlCartRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        self.status_history = SqlOrderStatusHistoryRepository(self._session)
        super().__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        except SQLAlchemyError as rollback_exc:
            raise StorageError(
                f"Failed to roll back transaction: {rollback_exc}"
            ) from rollback_exc
        finally:
            self._session.close()
            self._session = None
        if isinstance(exc, SQLAlchemyError):
            raise StorageError(f"Database operation failed: {exc}") from exc

    def commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StorageError(f"Failed to commit transaction: {exc}") from exc

    def rollback(self) -> None:
        self._session.rollback()
