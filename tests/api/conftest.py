"""Route test fixtures — FastAPI test client with the store handle on app.state.

Invariants:
    - Every test gets a fresh in-memory SQLite database (root conftest)
    - app.state.db_manager points at the test engine for the duration of a test
    - auth_headers carries a token issued with the test settings

Design Decisions:
    - httpx ASGITransport does not run the lifespan, so the handle is attached directly
"""

import pytest
from httpx import ASGITransport, AsyncClient

from fxledger.config import get_settings
from fxledger.infrastructure.access_tokens import issue_access_token
from fxledger.main import app


@pytest.fixture
async def client(db_manager):
    """FastAPI test client wired to the test database."""
    app.state.db_manager = db_manager
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
    app.state.db_manager = None


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {issue_access_token(get_settings())}"}


@pytest.fixture
async def created(client, auth_headers, valid_payload):
    """One transaction created through the API."""
    res = await client.post("/transactions", json=valid_payload, headers=auth_headers)
    assert res.status_code == 201
    return res.json()["data"]
