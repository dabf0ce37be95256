"""Database Session Manager — rollback, error mapping and health check."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from lessons_api.core.errors import UpstreamFailureError
import lessons_api.infrastructure.database as db_module
from lessons_api.infrastructure.database import (
    DatabaseSessionManager, _engine_options, get_db,
)


@pytest.fixture
def manager(test_engine, test_session_factory):
    m = DatabaseSessionManager.__new__(DatabaseSessionManager)
    m.engine = test_engine
    m._session_factory = test_session_factory
    return m


async def test_health_check_ok(manager):
    assert await manager.health_check() is True


@pytest.mark.parametrize("error, operation", [
    (IntegrityError("INSERT", {}, Exception("dup")), "commit"),
    (OperationalError("SELECT", {}, Exception("gone")), "execute"),
])
async def test_sqlalchemy_errors_map_to_upstream(manager, error, operation):
    with pytest.raises(UpstreamFailureError) as exc:
        async with manager.session():
            raise error
    assert exc.value.operation == operation
    assert exc.value.collaborator == "Database"


async def test_domain_errors_pass_through(manager):
    with pytest.raises(KeyError):
        async with manager.session():
            raise KeyError("not a database error")


def test_postgres_engine_gets_pool_options():
    options = _engine_options("postgresql+asyncpg://u:p@db/lessons", 5, 2)
    assert options["pool_size"] == 5
    assert options["max_overflow"] == 2
    assert options["pool_pre_ping"] is True


def test_sqlite_engine_uses_driver_defaults():
    assert _engine_options("sqlite+aiosqlite:///:memory:", 5, 2) == {}


async def test_get_db_without_manager_is_upstream_failure(monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    with pytest.raises(UpstreamFailureError):
        async for _ in get_db():
            pass
