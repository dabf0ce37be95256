"""API test fixtures — async SQLite DB, FastAPI test client, fake providers.

Invariants:
    - Every test gets a fresh in-memory SQLite database (tests/conftest.py)
    - get_db dependency overridden to use the test DB session
    - Identity and payment providers replaced through dependency_overrides:
      no test ever reaches Firebase or Stripe
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (ADR: PostgreSQL-specific features not exercised here)
    - Bearer tokens are "valid:<email>" (see FakeIdentityVerifier): headers read naturally
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from lessons_api.api.dependencies import get_checkout_gateway, get_identity_verifier
from lessons_api.infrastructure.database import get_db, DatabaseSessionManager
from lessons_api.models.account import Account
from lessons_api.models.lesson import Lesson, LessonFavorite, LessonLike
import lessons_api.infrastructure.database as db_module
from lessons_api.main import app
from tests.services.fake_store import FakeCheckoutGateway, FakeIdentityVerifier

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def verifier():
    return FakeIdentityVerifier()


@pytest.fixture
def gateway():
    return FakeCheckoutGateway()


@pytest.fixture
async def client(test_engine, test_session_factory, verifier, gateway):
    """FastAPI test client with DB and provider dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_verifier] = lambda: verifier
    app.dependency_overrides[get_checkout_gateway] = lambda: gateway

    # Readiness probe reads db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seed helpers ────────────────────────────────────────────────

@pytest.fixture
def seed_account(test_db):
    """Insert an account row directly; returns the ORM object."""
    async def _seed(email, role="user", is_premium=False, name=None):
        account = Account(
            email=email, name=name or email.split("@")[0],
            role=role, is_premium=is_premium, created_at=BASE_TIME,
        )
        test_db.add(account)
        await test_db.commit()
        return account
    return _seed


@pytest.fixture
def seed_lesson(test_db):
    """Insert a lesson row (plus like/favorite rows); returns the ORM object."""
    async def _seed(
        creator_email, minutes=0, likes=(), favorites=(), **fields,
    ):
        values = {
            "title": "A lesson",
            "description": "",
            "access_level": "public",
            "visibility": "public",
            "created_at": BASE_TIME + timedelta(minutes=minutes),
        }
        values.update(fields)
        lesson = Lesson(creator_email=creator_email, **values)
        lesson.like_entries = [LessonLike(account_email=e) for e in likes]
        lesson.favorite_entries = [LessonFavorite(account_email=e) for e in favorites]
        test_db.add(lesson)
        await test_db.commit()
        return lesson
    return _seed
