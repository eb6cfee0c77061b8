"""Route Dependencies — access guard, DB session and service providers.

Invariants:
    - require_access runs before any store dependency on guarded routers
    - The DB handle is read from app.state (set by the lifespan); never from a module global
    - A missing DB handle is a StoreError (500 application envelope), not a crash
    - JSON bodies that are absent, malformed or not objects read as {}
"""

import json
import logging
from typing import AsyncGenerator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fxledger.config import Settings, get_settings
from fxledger.core.error_messages import UNAUTHORIZED_NO_TOKEN
from fxledger.core.errors import StoreError, UnauthorizedError
from fxledger.infrastructure.access_tokens import AccessDecision, evaluate_access
from fxledger.infrastructure.database import DatabaseSessionManager
from fxledger.infrastructure.transaction_store import SqlTransactionStore
from fxledger.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)


async def require_access(
    request: Request,
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Bearer-token guard: 401 unless the token verifies and carries the shared api key."""
    decision = evaluate_access(authorization, settings)
    if decision is AccessDecision.ADMITTED:
        return
    logger.warning(
        f"Access denied: {decision.value}",
        extra={"path": request.url.path, "error_code": "UNAUTHORIZED"},
    )
    if decision is AccessDecision.NO_TOKEN:
        raise UnauthorizedError(UNAUTHORIZED_NO_TOKEN)
    raise UnauthorizedError()


def get_db_manager(request: Request) -> DatabaseSessionManager:
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise StoreError("connect", "Database not initialized")
    return manager


async def get_db(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with manager.session() as session:
        yield session


def get_transaction_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TransactionService:
    return TransactionService(
        SqlTransactionStore(db), list_limit=settings.list_default_limit,
    )


async def read_json_object(request: Request) -> dict:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning(
            "Ignoring malformed JSON body", extra={"path": request.url.path},
        )
        return {}
    return data if isinstance(data, dict) else {}
