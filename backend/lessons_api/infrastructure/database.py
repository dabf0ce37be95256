"""Database Session Manager — one AsyncSession per request, failures surfaced as UPSTREAM_FAILURE.

Invariants:
    - Every session rolls back on a database exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to UpstreamFailureError("Database", <operation>)
    - Domain errors raised inside a session pass through untouched
    - PostgreSQL engines get a pre-pinged, recycled pool; SQLite URLs (local runs)
      use the driver's default pool

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: repositories build dicts from ORM rows after commit
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from lessons_api.core.errors import UpstreamFailureError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIError subclasses
_OPERATION_BY_ERROR: tuple[tuple[type[SQLAlchemyError], str], ...] = (
    (IntegrityError, "commit"),
    (OperationalError, "execute"),
    (DBAPIError, "query"),
    (SQLAlchemyError, "operation"),
)


def _failed_operation(error: SQLAlchemyError) -> str:
    for error_type, operation in _OPERATION_BY_ERROR:
        if isinstance(error, error_type):
            return operation
    return "operation"


def _engine_options(database_url: str, pool_size: int, max_overflow: int) -> dict:
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that map DB failures to 503."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url, **_engine_options(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            operation = _failed_operation(e)
            logger.error(
                f"Database {operation} failed: {type(e).__name__}: {e}",
                extra={"collaborator": "database"},
            )
            raise UpstreamFailureError("Database", operation)
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Readiness probe: SELECT 1 through a managed session."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (UpstreamFailureError, OSError) as e:
            logger.warning(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise UpstreamFailureError("Database", "connect")
    async with db_manager.session() as session:
        yield session
