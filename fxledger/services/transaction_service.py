"""Transaction Service — composes sanitize -> validate -> normalize -> persist per operation.

Invariants:
    - Every public method returns a Result; no exception escapes (single fault boundary)
    - Raised FxLedgerErrors become their own tagged Failure (StoreError -> Application)
    - Unexpected faults collapse to Failure.application() and are logged with traceback
    - Malformed ids are rejected before any store call
    - Update loads the existing record first; absent target is NotFound, never an upsert

Design Decisions:
    - Store injected (RecordStore protocol) instead of inherited (ADR: composition over base classes)
    - Clock injected so the pure normalizer stays deterministic under test
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from fxledger.core.domain_types import InvalidTransactionId, Result, TransactionId
from fxledger.core.enforce_fields import (
    CREATE_TRANSACTION_SCHEMA, UPDATE_TRANSACTION_SCHEMA, validate_fields,
)
from fxledger.core.error_messages import (
    TRANSACTION_ID_INVALID, TRANSACTION_ID_MISSING, TRANSACTION_NOT_FOUND,
    TRANSACTION_NOT_UPDATED, TRANSACTIONS_NOT_FOUND, UPDATE_ID_INVALID,
    UPDATE_TARGET_MISSING,
)
from fxledger.core.errors import Failure, FxLedgerError
from fxledger.core.normalize_transaction import (
    normalize_new_transaction, normalize_transaction_update,
)
from fxledger.core.repository_protocols import DEFAULT_LIST_LIMIT, RecordStore
from fxledger.core.sanitize_payload import sanitize_payload
from fxledger.schemas.transaction import Transaction

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TransactionService:
    """Create, list, get and update FX transactions."""

    def __init__(
        self,
        store: RecordStore[Transaction],
        clock: Callable[[], datetime] = utc_now,
        list_limit: int = DEFAULT_LIST_LIMIT,
    ):
        self.store = store
        self.clock = clock
        self.list_limit = list_limit

    async def create_transaction(self, payload: Mapping[str, Any] | None) -> Result[Transaction]:
        try:
            data = sanitize_payload(_as_mapping(payload))
            errors = validate_fields(CREATE_TRANSACTION_SCHEMA, data)
            if errors:
                return Result.fail(Failure.validation(errors))

            now = self.clock()
            record = normalize_new_transaction(
                data, TransactionId.generate(now.timestamp()), now,
            )
            transaction = Transaction.model_validate(record)
            await self.store.create(transaction)
            return Result.ok(transaction)
        except Exception as e:
            return _application_failure("create", e)

    async def list_transactions(
        self, constraints: Mapping[str, Any] | None = None, limit: int | None = None,
    ) -> Result[list[Transaction]]:
        try:
            transactions = await self.store.list(
                _as_mapping(constraints), limit or self.list_limit,
            )
            if not transactions:
                return Result.fail(Failure.not_found(TRANSACTIONS_NOT_FOUND))
            return Result.ok(transactions)
        except Exception as e:
            return _application_failure("list", e)

    async def get_transaction(self, raw_id: object) -> Result[Transaction]:
        try:
            if not raw_id:
                return Result.fail(Failure.validation({"transaction": TRANSACTION_ID_MISSING}))
            try:
                transaction_id = TransactionId.parse(raw_id)
            except InvalidTransactionId:
                return Result.fail(Failure.validation({"transaction": TRANSACTION_ID_INVALID}))

            transaction = await self.store.get_by_id(transaction_id)
            if transaction is None:
                return Result.fail(Failure.not_found(TRANSACTION_NOT_FOUND))
            return Result.ok(transaction)
        except Exception as e:
            return _application_failure("get", e)

    async def update_transaction(self, payload: Mapping[str, Any] | None) -> Result[Transaction]:
        try:
            data = sanitize_payload(_as_mapping(payload))
            try:
                transaction_id = TransactionId.parse(data.get("id"))
            except InvalidTransactionId:
                return Result.fail(Failure.validation({"transaction": UPDATE_ID_INVALID}))

            existing = await self.store.get_by_id(transaction_id)
            if existing is None:
                return Result.fail(Failure.not_found({"transaction": UPDATE_TARGET_MISSING}))

            errors = validate_fields(UPDATE_TRANSACTION_SCHEMA, data)
            if errors:
                return Result.fail(Failure.validation(errors))

            partial = normalize_transaction_update(data, self.clock())
            merged = await self.store.update(transaction_id, partial)
            if merged is None:
                return Result.fail(Failure.not_found(TRANSACTION_NOT_UPDATED))
            return Result.ok(merged)
        except Exception as e:
            return _application_failure("update", e)


def _as_mapping(value: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _application_failure(operation: str, error: Exception) -> Result:
    if isinstance(error, FxLedgerError):
        logger.error(
            f"Transaction {operation} failed: {error.message}",
            extra={"operation": operation, "error_code": error.kind.value},
        )
        return Result.fail(error.to_failure())
    logger.error(
        f"Unexpected fault during transaction {operation}: {error}",
        extra={"operation": operation, "error_code": "APPLICATION_ERROR"},
        exc_info=True,
    )
    return Result.fail(Failure.application())
