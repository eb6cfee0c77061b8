"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the store is unreachable (readiness)
    - Probes are not behind the access guard and never touch transaction data
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from fxledger.core.format_envelope import failure_envelope, success_envelope

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return success_envelope({"status": "healthy", "service": "fx-ledger"})


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — includes store connectivity."""
    manager = getattr(request.app.state, "db_manager", None)
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=failure_envelope({"database": "unavailable"}),
        )
    return success_envelope({"status": "ready", "checks": {"database": "healthy"}})
