"""Service test fixtures — in-memory Store for handler unit tests.

Invariants:
    - Every test gets a fresh, empty in-memory store
    - Handlers are exercised without FastAPI, SQLAlchemy or any provider SDK
"""

import pytest

from tests.services.fake_store import FakeCheckoutGateway, make_store


@pytest.fixture
def store():
    return make_store()


@pytest.fixture
def gateway():
    return FakeCheckoutGateway()
