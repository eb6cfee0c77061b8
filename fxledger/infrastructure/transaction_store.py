"""Transaction Store — SQLAlchemy implementation of RecordStore[Transaction].

Invariants:
    - The ONLY module translating wire fields (camelCase) <-> persisted columns
    - Every SQLAlchemy fault is re-raised as StoreError after rollback
    - list() is ordered by creation (created_timestamp, then id) and always capped
    - Filters are equality-only; unknown fields or non-scalar values match nothing
    - update() never touches id, created or created_timestamp

Design Decisions:
    - One store instance per request session (injected via FastAPI dependency)
    - Writes commit immediately: every operation is a single atomic call, no multi-step
      transactions (last-write-wins on concurrent updates)
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import false, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fxledger.core.domain_types import InvalidTransactionId, TransactionId
from fxledger.core.errors import StoreError
from fxledger.core.repository_protocols import DEFAULT_LIST_LIMIT
from fxledger.models.transaction import TransactionRecord
from fxledger.schemas.transaction import Transaction

logger = logging.getLogger(__name__)

WIRE_TO_COLUMN: dict[str, str] = {
    "id": "id",
    "customerId": "customer_id",
    "fromAmount": "from_amount",
    "fromCurrency": "from_currency",
    "toAmount": "to_amount",
    "toCurrency": "to_currency",
    "created": "created",
    "createdTimestamp": "created_timestamp",
    "updated": "updated",
    "updatedTimestamp": "updated_timestamp",
}
IMMUTABLE_COLUMNS = frozenset({"id", "created", "created_timestamp"})


def record_to_transaction(row: TransactionRecord) -> Transaction:
    return Transaction(**{column: getattr(row, column) for column in WIRE_TO_COLUMN.values()})


def transaction_to_record(transaction: Transaction) -> TransactionRecord:
    return TransactionRecord(
        **{column: getattr(transaction, column) for column in WIRE_TO_COLUMN.values()},
    )


class SqlTransactionStore:
    """CRUD over the transactions table for one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, record: Transaction) -> TransactionId:
        transaction_id = TransactionId.parse(record.id)
        try:
            self.db.add(transaction_to_record(record))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("create", e)
        logger.info(
            "Transaction created", extra={"transaction_id": str(transaction_id)},
        )
        return transaction_id

    async def get_by_id(self, record_id: TransactionId) -> Transaction | None:
        try:
            row = await self.db.get(TransactionRecord, record_id.value)
        except SQLAlchemyError as e:
            await self._fail("get", e)
        return record_to_transaction(row) if row is not None else None

    async def list(
        self, constraints: Mapping[str, Any], limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[Transaction]:
        query = select(TransactionRecord).order_by(
            TransactionRecord.created_timestamp.asc(), TransactionRecord.id.asc(),
        )
        for condition in _build_conditions(constraints):
            query = query.where(condition)
        query = query.limit(limit if limit and limit > 0 else DEFAULT_LIST_LIMIT)
        try:
            result = await self.db.execute(query)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            await self._fail("list", e)
        return [record_to_transaction(row) for row in rows]

    async def update(
        self, record_id: TransactionId, partial: Mapping[str, Any],
    ) -> Transaction | None:
        try:
            row = await self.db.get(TransactionRecord, record_id.value)
            if row is None:
                return None
            for wire_name, value in partial.items():
                column = WIRE_TO_COLUMN.get(wire_name)
                if column is None or column in IMMUTABLE_COLUMNS:
                    continue
                setattr(row, column, value)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("update", e)
        logger.info(
            "Transaction updated", extra={"transaction_id": record_id.value},
        )
        return record_to_transaction(row)

    async def delete(self, record_id: TransactionId) -> bool:
        """Remove a record. Not exposed by any public endpoint."""
        try:
            row = await self.db.get(TransactionRecord, record_id.value)
            if row is None:
                return False
            await self.db.delete(row)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("delete", e)
        return True

    async def _fail(self, operation: str, error: SQLAlchemyError):
        logger.error(
            f"Transaction store {operation} failed: {error}",
            extra={"operation": operation, "error_code": "STORE_ERROR"},
        )
        try:
            await self.db.rollback()
        except SQLAlchemyError as rollback_error:
            logger.warning(f"Rollback after failed {operation} also failed: {rollback_error}")
        raise StoreError(operation, type(error).__name__) from error


def _build_conditions(constraints: Mapping[str, Any]) -> list:
    conditions = []
    for wire_name, value in (constraints or {}).items():
        column_name = WIRE_TO_COLUMN.get(wire_name)
        if column_name is None or not _is_scalar(value):
            conditions.append(false())
            continue
        if column_name == "id":
            try:
                value = TransactionId.parse(value).value
            except InvalidTransactionId:
                conditions.append(false())
                continue
        conditions.append(getattr(TransactionRecord, column_name) == value)
    return conditions


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)
