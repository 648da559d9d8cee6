"""API test fixtures — FastAPI app wired to a fake or a real store.

Invariants:
    - ASGITransport does not run the lifespan; fixtures set app.state directly
    - fake_store is an AsyncMock honouring the UserStore protocol

Design Decisions:
    - Fake store for status-code mapping (mirrors a mock DAO), real store for end-to-end flows
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from user_dal.core.repository_protocols import UserStore
from user_dal.main import create_app


@pytest.fixture
def fake_store():
    return AsyncMock(spec=UserStore)


async def _client_for(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def fake_app(fake_store, db_manager):
    app = create_app()
    app.state.user_store = fake_store
    app.state.db_manager = db_manager
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def fake_client(fake_app):
    """Client whose routes talk to fake_store."""
    async for c in _client_for(fake_app):
        yield c


@pytest.fixture
async def client(store, db_manager):
    """Client whose routes talk to a real SQLite-backed store."""
    app = create_app()
    app.state.user_store = store
    app.state.db_manager = db_manager
    async for c in _client_for(app):
        yield c
