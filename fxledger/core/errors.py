"""Error Taxonomy — tagged failures for the pure core and typed exceptions for the shell.

Invariants:
    - Every failure carries an ErrorKind and a field -> message mapping
    - Kind decides the default HTTP status; handlers may override per operation
    - to_response() produces the {success: false, errors} envelope
    - Application failures always expose the generic APPLICATION_ERROR mapping only

Design Decisions:
    - Failure (value) for expected outcomes, FxLedgerError (exception) for the shell:
      core functions return results, infrastructure raises (ADR: no exceptions as control flow)
    - StoreError wraps every driver fault so callers never see raw driver exceptions
"""

from dataclasses import dataclass, field
from enum import Enum

from fxledger.core.format_envelope import failure_envelope
from fxledger.core.error_messages import (
    APPLICATION_ERROR, RESOURCE_NOT_FOUND, UNAUTHORIZED_INVALID_TOKEN,
)


class ErrorKind(str, Enum):
    """Error categories surfaced to the API layer."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    APPLICATION = "application"


DEFAULT_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.APPLICATION: 500,
}


@dataclass(frozen=True)
class Failure:
    """Expected failure returned (not raised) by core and service functions."""
    kind: ErrorKind
    errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def validation(cls, errors: dict[str, str]) -> "Failure":
        return cls(ErrorKind.VALIDATION, dict(errors))

    @classmethod
    def not_found(cls, errors: dict[str, str]) -> "Failure":
        return cls(ErrorKind.NOT_FOUND, dict(errors))

    @classmethod
    def application(cls) -> "Failure":
        return cls(ErrorKind.APPLICATION, dict(APPLICATION_ERROR))


class FxLedgerError(Exception):
    """Base exception for faults raised outside the pure core."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        errors: dict[str, str] | None = None,
        http_status: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.errors = errors if errors is not None else {"message": message}
        self.http_status = http_status or DEFAULT_STATUS[kind]

    def to_failure(self) -> Failure:
        return Failure(self.kind, dict(self.errors))

    def to_response(self) -> dict:
        """Convert to the uniform failure envelope."""
        return failure_envelope(dict(self.errors))


class UnauthorizedError(FxLedgerError):
    """Missing, unverifiable or non-matching access token."""
    def __init__(self, message: str = UNAUTHORIZED_INVALID_TOKEN):
        super().__init__(message, ErrorKind.UNAUTHORIZED, {"message": message})


class ResourceNotFoundError(FxLedgerError):
    """Route or resource does not exist."""
    def __init__(self):
        super().__init__(
            RESOURCE_NOT_FOUND["resource"], ErrorKind.NOT_FOUND,
            dict(RESOURCE_NOT_FOUND), 404,
        )


class StoreError(FxLedgerError):
    """Persistence operation failed. Detail is kept for logs, never for callers."""
    def __init__(self, operation: str, detail: str = ""):
        super().__init__(
            f"Store {operation} failed: {detail}" if detail else f"Store {operation} failed",
            ErrorKind.APPLICATION, dict(APPLICATION_ERROR), 500,
        )
        self.operation = operation
