import pytest

from storefront.infrastructure.persistence.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from storefront.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


@pytest.fixture
def engine(tmp_path):
    db_engine = build_engine(f"sqlite:///{tmp_path / 'storefront.db'}")
    create_schema(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def uow(session_factory):
    return SqlAlchemyUnitOfWork(session_factory)
