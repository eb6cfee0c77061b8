"""Access guard, fallback routing, health probes and store faults at the HTTP edge.

Invariants:
    - Guarded routes answer 401 {errors: {message}} before touching the store
    - Unknown routes and methods answer 404 {errors: {resource}} without a token
    - Store faults surface as 500 {errors: {app}} with no internal detail
"""

import jwt
import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from fxledger.api.dependencies import get_transaction_service
from fxledger.config import get_settings
from fxledger.core.error_messages import (
    APPLICATION_ERROR, RESOURCE_NOT_FOUND, UNAUTHORIZED_INVALID_TOKEN,
    UNAUTHORIZED_NO_TOKEN,
)
from fxledger.infrastructure.database import DatabaseSessionManager
from fxledger.main import app
from fxledger.services.transaction_service import TransactionService
from tests.services.fake_store import BrokenStore


GUARDED = [
    ("POST", "/transactions"),
    ("GET", "/transactions"),
    ("POST", "/transactions/update"),
    ("GET", "/transactions/111b6742d6676e356218155a"),
]


# ─── access guard ────────────────────────────────────────────────

@pytest.mark.parametrize("method,path", GUARDED)
async def test_guarded_route_without_token(client, method, path):
    res = await client.request(method, path, json={})
    assert res.status_code == 401
    assert res.json() == {
        "success": False, "errors": {"message": UNAUTHORIZED_NO_TOKEN},
    }


@pytest.mark.parametrize("method,path", GUARDED)
async def test_guarded_route_with_bad_token(client, method, path):
    res = await client.request(
        method, path, json={}, headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert res.status_code == 401
    assert res.json()["errors"] == {"message": UNAUTHORIZED_INVALID_TOKEN}


async def test_token_with_wrong_api_key_claim(client):
    token = jwt.encode(
        {"apiKey": "someone-else"}, get_settings().app_jwt_secret, algorithm="HS256",
    )
    res = await client.get(
        "/transactions", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401
    assert res.json()["errors"]["message"] == UNAUTHORIZED_INVALID_TOKEN


@pytest.mark.parametrize("scheme", ["", "Basic "])
async def test_token_without_bearer_scheme(client, auth_headers, scheme):
    token = auth_headers["Authorization"].split()[1]
    res = await client.get("/transactions", headers={"Authorization": f"{scheme}{token}"})
    assert res.status_code == 401
    assert res.json()["errors"] == {"message": UNAUTHORIZED_INVALID_TOKEN}


async def test_rejected_create_writes_nothing(client, auth_headers, valid_payload):
    await client.post("/transactions", json=valid_payload)
    res = await client.get("/transactions", headers=auth_headers)
    assert res.status_code == 404


# ─── fallback ────────────────────────────────────────────────────

@pytest.mark.parametrize("method,path", [
    ("GET", "/"),
    ("GET", "/does/not/exist"),
    ("POST", "/transactions/update/extra"),
    ("DELETE", "/transactions"),
    ("PUT", "/transactions/111b6742d6676e356218155a"),
])
async def test_unknown_route_is_404(client, method, path):
    res = await client.request(method, path)
    assert res.status_code == 404
    assert res.json() == {"success": False, "errors": RESOURCE_NOT_FOUND}


# ─── health probes ───────────────────────────────────────────────

async def test_liveness(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "healthy"


async def test_readiness(client):
    res = await client.get("/health/ready")
    assert res.status_code == 200
    assert res.json()["data"]["checks"]["database"] == "healthy"


async def test_readiness_without_store(client):
    app.state.db_manager = None
    res = await client.get("/health/ready")
    assert res.status_code == 503
    assert res.json()["errors"] == {"database": "unavailable"}


# ─── store faults ────────────────────────────────────────────────

@pytest.fixture
async def unreachable_manager(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path}/missing/dir/fx.db",
    )
    yield DatabaseSessionManager.from_engine(engine)
    await engine.dispose()


async def test_uninitialized_store_is_500(client, auth_headers):
    app.state.db_manager = None
    res = await client.get("/transactions", headers=auth_headers)
    assert res.status_code == 500
    assert res.json() == {"success": False, "errors": APPLICATION_ERROR}


@pytest.mark.parametrize("method,path", GUARDED)
async def test_unreachable_store_is_500(
    client, auth_headers, valid_payload, unreachable_manager, method, path,
):
    app.state.db_manager = unreachable_manager
    body = dict(valid_payload, id="111b6742d6676e356218155a")
    res = await client.request(method, path, json=body, headers=auth_headers)
    assert res.status_code == 500
    assert res.json()["errors"] == APPLICATION_ERROR


async def test_store_fault_detail_is_not_leaked(client, auth_headers, valid_payload):
    app.dependency_overrides[get_transaction_service] = lambda: TransactionService(
        BrokenStore(RuntimeError("password=hunter2")),
    )
    res = await client.post("/transactions", json=valid_payload, headers=auth_headers)
    assert res.status_code == 500
    assert "hunter2" not in res.text
    assert res.json()["errors"] == APPLICATION_ERROR
