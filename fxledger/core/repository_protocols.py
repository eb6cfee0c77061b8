"""Boundary Protocols — contract between the service layer and persistence.

Invariants:
    - Core NEVER imports from infrastructure — implementations are injected
    - Malformed ids never reach a store: callers hand over parsed TransactionId values
    - Implementations raise StoreError (never raw driver exceptions)

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Generic over the record type so the same contract serves any single-collection store
"""

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from fxledger.core.domain_types import TransactionId


RecordT = TypeVar("RecordT")

DEFAULT_LIST_LIMIT: int = 100


class RecordStore(Protocol[RecordT]):
    """CRUD contract for one logical collection keyed by TransactionId."""
    async def create(self, record: RecordT) -> TransactionId: ...
    async def get_by_id(self, record_id: TransactionId) -> RecordT | None: ...
    async def list(
        self, constraints: Mapping[str, Any], limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[RecordT]: ...
    async def update(
        self, record_id: TransactionId, partial: Mapping[str, Any],
    ) -> RecordT | None: ...
    async def delete(self, record_id: TransactionId) -> bool: ...
