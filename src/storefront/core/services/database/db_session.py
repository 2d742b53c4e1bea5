"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine, make_url
from sqlmodel import Session, SQLModel, create_engine

from src.storefront.runtime.config.config_data import ConfigData
from src.storefront.runtime.context import get_config


def _build_engine(config: ConfigData) -> Engine:
    db_config = config.database
    url = make_url(db_config.url)

    if db_config.is_sqlite:
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        if config.app.environment == "production":
            logger.warning(
                "SQLite is not recommended for production use. "
                "Consider PostgreSQL for better performance and reliability."
            )
        engine_kwargs = {
            "connect_args": {"check_same_thread": False, "timeout": 20},
            "echo": False,
        }
        # Every connection to an in-memory database is a new database
        if url.database in (None, "", ":memory:"):
            engine_kwargs["poolclass"] = StaticPool
        return create_engine(db_config.url, **engine_kwargs)

    return create_engine(
        db_config.url,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_recycle=db_config.pool_recycle,
        pool_pre_ping=True,
        echo=False,
        connect_args={"application_name": f"{config.app.environment}_storefront"},
    )


class DbSessionService:
    def __init__(self, engine: Engine | None = None):
        """Initialize the shared database engine and session factory."""
        main_config = get_config()
        if engine is None:
            logger.info(
                "Configuring database engine for environment: {}",
                main_config.app.environment,
            )
            engine = _build_engine(main_config)
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_all(self) -> None:
        """Create the catalog tables if they do not exist."""
        from src.storefront.entities import (  # noqa: F401
            CategoryTable,
            ProductTable,
            SkinConcernTable,
        )

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database tables ensured")

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.bind(error_type=type(e).__name__).error(
                "Database transaction failed: {}", e
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        self._engine.dispose()
