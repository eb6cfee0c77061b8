"""Error Handlers — global exception handlers rendering every fault in the envelope.

Invariants:
    - FxLedgerError → its own status + {success: false, errors}
    - RequestValidationError → 400 with {field: message}
    - Unmatched route or method → 404 {errors: {resource}}
    - Exception (catch-all) → 500 {errors: {app}}, never leaks internal details

Design Decisions:
    - Four-layer handler: domain (FxLedgerError), request validation, routing, catch-all
    - Extracted from main.py to keep app wiring small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fxledger.core.error_messages import APPLICATION_ERROR
from fxledger.core.errors import FxLedgerError, ResourceNotFoundError
from fxledger.core.format_envelope import failure_envelope

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(FxLedgerError)
    async def fxledger_error_handler(request: Request, exc: FxLedgerError):
        """Handle FX Ledger domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"FxLedgerError: {exc.message}",
            extra={"error_code": exc.kind.value, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle framework-level (query/path) validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=failure_envelope(_build_validation_errors(exc)),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Routing misses (404/405) become the resource-not-found envelope."""
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            missing = ResourceNotFoundError()
            return JSONResponse(
                status_code=missing.http_status, content=missing.to_response(),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=failure_envelope({"message": str(exc.detail)}),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure_envelope(dict(APPLICATION_ERROR)),
        )


def _build_validation_errors(exc: RequestValidationError) -> dict[str, str]:
    """Collapse pydantic error list to {field: message}; last message per field wins."""
    errors: dict[str, str] = {}
    for e in exc.errors():
        loc = [str(part) for part in e.get("loc", ()) if part not in ("query", "path", "body")]
        errors[".".join(loc) or "request"] = e.get("msg", "Invalid value")
    return errors
