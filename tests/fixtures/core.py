from __future__ import annotations

from collections.abc import Generator

import pytest
from sqlalchemy import StaticPool
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from src.storefront.core.services.catalog.catalog_service import CatalogService
from src.storefront.core.services.catalog.seed_data import seed_catalog
from src.storefront.core.services.database.db_session import DbSessionService


def _memory_engine() -> Engine:
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.storefront.entities import (  # noqa: F401
        CategoryTable,
        ProductTable,
        SkinConcernTable,
    )

    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def session() -> Generator[Session]:
    """Create a fresh, empty database session for testing."""
    engine = _memory_engine()

    with Session(engine, expire_on_commit=False) as session:
        try:
            yield session
        finally:
            session.rollback()
            session.close()
            engine.dispose()


@pytest.fixture
def seeded_session(session: Session) -> Session:
    """A session whose database holds the sample catalogue."""
    seed_catalog(session)
    session.commit()
    return session


@pytest.fixture
def catalog(seeded_session: Session) -> CatalogService:
    return CatalogService(seeded_session)


@pytest.fixture
def db_service() -> Generator[DbSessionService]:
    """Database service over a seeded in-memory engine, as the app uses it."""
    service = DbSessionService(engine=_memory_engine())
    with service.session_scope() as db:
        seed_catalog(db)

    yield service

    service.dispose()
