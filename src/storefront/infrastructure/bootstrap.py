"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from storefront.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=None)
def engine(database_url: str) -> Engine:
    db_engine = build_engine(database_url)
    create_schema(db_engine)
    return db_engine


@lru_cache(maxsize=None)
def session_factory(database_url: str) -> sessionmaker[Session]:
    return build_session_factory(engine(database_url))


def unit_of_work(config: Settings | None = None) -> SqlAlchemyUnitOfWork:
    config = config or settings()
    return SqlAlchemyUnitOfWork(session_factory(config.database_url))
