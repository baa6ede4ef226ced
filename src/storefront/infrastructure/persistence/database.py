"""Engine and session construction for the SQLAlchemy backend."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TypeVar

from sqlalchemy import Engine, create_engine, event, make_url
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.sql import Executable

from storefront.domain.exceptions import StorageError
from storefront.infrastructure.persistence.tables import Base

T = TypeVar("T")

SQLITE_BUSY_TIMEOUT_SECONDS = 30


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite engines get immediate write transactions."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={
                "check_same_thread": False,
                "timeout": SQLITE_BUSY_TIMEOUT_SECONDS,
            },
        )
        _configure_sqlite(engine)
        return engine
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def _configure_sqlite(engine: Engine) -> None:
    """Serialize writers on SQLite.

    pysqlite's own deferred BEGIN lets two transactions read the same stock
    and then deadlock when both try to write.  Taking the write lock with
    BEGIN IMMEDIATE makes the second transaction wait for the first one
    instead.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to create the database schema: {exc}") from exc


def execute(session: Session, statement: Executable) -> Result:
    """Execute a statement, translating driver errors to StorageError."""
    try:
        return session.execute(statement)
    except SQLAlchemyError as exc:
        raise StorageError(f"Database statement failed: {exc}") from exc


def get_row(session: Session, row_type: type[T], key: str, **kwargs: Any) -> T | None:
    """``Session.get`` with driver errors translated to StorageError."""
    try:
        return session.get(row_type, key, **kwargs)
    except SQLAlchemyError as exc:
        raise StorageError(f"Database read failed: {exc}") from exc


def flush(session: Session) -> None:
    """Flush pending changes, translating driver errors to StorageError."""
    try:
        session.flush()
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to write to the database: {exc}") from exc


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo; every stored timestamp is UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
