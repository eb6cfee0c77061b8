"""Root conftest — shared test configuration and DB fixtures.

Invariants:
    - Environment defaults are set before fxledger.config is first imported
    - Every test gets a fresh in-memory SQLite database

Design Decisions:
    - SQLite in-memory through aiosqlite with StaticPool: one shared connection so every
      session sees the same database (no external dependency)
"""

import os

os.environ.setdefault("APP_ACCESS_API_KEY", "test-access-api-key")
os.environ.setdefault("APP_JWT_SECRET", "test-jwt-secret-with-at-least-32-bytes!!")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import fxledger.models  # noqa: E402,F401
from fxledger.db.base import Base  # noqa: E402
from fxledger.infrastructure.database import DatabaseSessionManager  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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


@pytest.fixture
def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def valid_payload():
    return {
        "customerId": "abc123",
        "fromAmount": 1000,
        "fromCurrency": "USD",
        "toAmount": 500000,
        "toCurrency": "NGN",
    }
