"""Transaction Routes — create, list, get and update FX transactions.

Invariants:
    - Every route is behind require_access (401 before any store access)
    - Routes hold no business logic: read body → call service → map Result tag to status
    - Status mapping: Validation → 400, NotFound → 400 (single record) / 404 (list),
      Application → 500
    - Bodies always use the {success, data} / {success: false, errors} envelope
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from fxledger.api.dependencies import (
    get_transaction_service, read_json_object, require_access,
)
from fxledger.core.domain_types import Result
from fxledger.core.errors import ErrorKind
from fxledger.core.format_envelope import failure_envelope, success_envelope
from fxledger.services.transaction_service import TransactionService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/transactions", tags=["transactions"],
    dependencies=[Depends(require_access)],
)


def failure_status(kind: ErrorKind, not_found_status: int) -> int:
    if kind is ErrorKind.APPLICATION:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if kind is ErrorKind.NOT_FOUND:
        return not_found_status
    if kind is ErrorKind.UNAUTHORIZED:
        return status.HTTP_401_UNAUTHORIZED
    return status.HTTP_400_BAD_REQUEST


def _failure_response(result: Result, not_found_status: int) -> JSONResponse:
    return JSONResponse(
        status_code=failure_status(result.failure.kind, not_found_status),
        content=failure_envelope(result.failure.errors),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    request: Request,
    service: TransactionService = Depends(get_transaction_service),
):
    """Record a new FX transaction."""
    payload = await read_json_object(request)
    result = await service.create_transaction(payload)
    if not result.is_ok:
        return _failure_response(result, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=success_envelope(result.value.to_wire()),
    )


@router.get("")
async def list_transactions(
    request: Request,
    limit: int | None = Query(None, ge=1),
    service: TransactionService = Depends(get_transaction_service),
):
    """List transactions. An optional JSON body is used as an equality filter."""
    constraints = await read_json_object(request)
    result = await service.list_transactions(constraints, limit)
    if not result.is_ok:
        return _failure_response(result, status.HTTP_404_NOT_FOUND)
    data = [transaction.to_wire() for transaction in result.value]
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=success_envelope(data, totalRecords=len(data)),
    )


@router.post("/update")
async def update_transaction(
    request: Request,
    service: TransactionService = Depends(get_transaction_service),
):
    """Merge supplied fields over an existing transaction."""
    payload = await read_json_object(request)
    result = await service.update_transaction(payload)
    if not result.is_ok:
        return _failure_response(result, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=success_envelope(result.value.to_wire()),
    )


@router.get("/{transaction_id}")
async def get_transaction(
    transaction_id: str,
    service: TransactionService = Depends(get_transaction_service),
):
    """Fetch one transaction by its 24-hex-character id."""
    result = await service.get_transaction(transaction_id)
    if not result.is_ok:
        return _failure_response(result, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=success_envelope(result.value.to_wire()),
    )
