"""Domain Types — identifier value type and the tagged Result returned by core/service calls.

Invariants:
    - TransactionId is always 24 lowercase hex characters
    - TransactionId.parse is the ONLY way to turn caller input into an id
    - Result holds exactly one of value / failure

Design Decisions:
    - Single explicit id type instead of sniffing strings vs driver objects (ADR: one id shape)
    - Id layout mirrors a document-store object id: 4-byte seconds prefix + 8 random bytes,
      so ids sort roughly by creation time
"""

import re
import secrets
import time
from dataclasses import dataclass
from typing import Generic, TypeVar

from fxledger.core.errors import Failure


_TRANSACTION_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

T = TypeVar("T")


class InvalidTransactionId(ValueError):
    """Raised when a value cannot be parsed as a TransactionId."""


@dataclass(frozen=True)
class TransactionId:
    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: object) -> "TransactionId":
        """Parse caller input. Surrounding whitespace is ignored, case is normalized."""
        if not isinstance(raw, str):
            raise InvalidTransactionId(f"transaction id must be a string, got {type(raw).__name__}")
        candidate = raw.strip()
        if not _TRANSACTION_ID_PATTERN.match(candidate):
            raise InvalidTransactionId(f"malformed transaction id: {candidate!r}")
        return cls(candidate.lower())

    @classmethod
    def generate(cls, timestamp: float | None = None) -> "TransactionId":
        seconds = int(time.time() if timestamp is None else timestamp) & 0xFFFFFFFF
        return cls(f"{seconds:08x}{secrets.token_hex(8)}")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a Failure. Handlers branch on .failure.kind."""
    value: T | None = None
    failure: Failure | None = None

    @property
    def is_ok(self) -> bool:
        return self.failure is None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, failure: Failure) -> "Result[T]":
        return cls(failure=failure)
