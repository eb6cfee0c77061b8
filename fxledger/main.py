"""FX Ledger API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render every fault in the {success: false, errors} envelope
    - CORS configured from settings (not hardcoded)
    - Store handle built once in the lifespan and attached to app.state; handlers receive
      it through dependencies

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Unmatched routes fall through to the 404 resource envelope (error_handlers.py)

Run with: uvicorn fxledger.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fxledger.api.error_handlers import register_error_handlers
from fxledger.api.routes import health, transactions
from fxledger.config import get_settings
from fxledger.infrastructure.database import DatabaseSessionManager
from fxledger.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await manager.create_schema()
    app.state.db_manager = manager
    logger.info("FX Ledger API started")
    yield
    logger.info("FX Ledger API shutting down")
    app.state.db_manager = None
    await manager.dispose()


app = FastAPI(title="FX Ledger API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(transactions.router)

register_error_handlers(app)
