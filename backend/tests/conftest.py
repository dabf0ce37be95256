"""Root conftest — shared test configuration and the async SQLite database.

Invariants:
    - Provider secrets and DATABASE_URL are set before any lessons_api import
    - Every test that asks for test_db gets a fresh in-memory SQLite database
"""

import os

# Ensure tests never reach real providers or a real database
os.environ.setdefault("STRIPE_SECRET", "sk_test_fake")
os.environ.setdefault("FIREBASE_PROJECT_ID", "lessons-test")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from lessons_api.db.base import Base  # noqa: E402
import lessons_api.models  # noqa: E402,F401  (registers every table on Base.metadata)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
