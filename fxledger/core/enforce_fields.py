"""Field Validation — schema-driven, non-fail-fast checks for transaction payloads.

Invariants:
    - PURE: validate_fields never mutates the payload
    - Every field is evaluated independently; ALL violating fields are reported
    - One message per field: when several constraints fail, the last one evaluated wins
    - A type failure stops further checks for that field
    - Empty result mapping == valid
    - Numbers are strict: bools, numeric strings, NaN and infinities are rejected

Design Decisions:
    - Rules as data (FieldRule) over per-endpoint if-chains: create and update share one engine,
      update only flips required=False (ADR: single validation path)
    - Last-message-wins kept deliberately so callers see one stable string per field;
      do not rely on WHICH message wins when several constraints fail
"""

import math
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any


AMOUNT_PRECISION: int = 2
CURRENCY_LENGTH: int = 3
CURRENCY_PATTERN = re.compile(r"^[A-Z]+$")
ALPHANUMERIC_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")


class RuleKind(str, Enum):
    STRING = "string"
    AMOUNT = "amount"
    CURRENCY = "currency"


@dataclass(frozen=True)
class FieldRule:
    name: str
    label: str
    kind: RuleKind
    required: bool = True
    alphanumeric: bool = False


@dataclass(frozen=True)
class Schema:
    rules: tuple[FieldRule, ...]
    allow_unknown: bool = False

    def optional(self) -> "Schema":
        """Same constraints, every field optional, unknown keys tolerated."""
        return Schema(
            rules=tuple(replace(rule, required=False) for rule in self.rules),
            allow_unknown=True,
        )


# ─── Transaction Schemas ────────────────────────────────────────

CREATE_TRANSACTION_SCHEMA = Schema(rules=(
    FieldRule("customerId", "Customer ID", RuleKind.STRING, alphanumeric=True),
    FieldRule("fromAmount", "Input or Source Amount", RuleKind.AMOUNT),
    FieldRule("toAmount", "Output or Destination Amount", RuleKind.AMOUNT),
    FieldRule("fromCurrency", "Input or Source Currency", RuleKind.CURRENCY),
    FieldRule("toCurrency", "Output or Destination Currency", RuleKind.CURRENCY),
))

UPDATE_TRANSACTION_SCHEMA = CREATE_TRANSACTION_SCHEMA.optional()

MUTABLE_FIELDS: tuple[str, ...] = tuple(rule.name for rule in CREATE_TRANSACTION_SCHEMA.rules)


# ─── Engine ─────────────────────────────────────────────────────

def validate_fields(schema: Schema, payload: Mapping[str, Any] | None) -> dict[str, str]:
    """Evaluate every rule against payload. Returns {field: message} for violations."""
    payload = payload if isinstance(payload, Mapping) else {}
    errors: dict[str, str] = {}

    for rule in schema.rules:
        for message in _check_field(rule, payload.get(rule.name)):
            errors[rule.name] = message

    if not schema.allow_unknown:
        known = {rule.name for rule in schema.rules}
        for key in payload:
            if key not in known:
                errors[str(key)] = f'"{key}" is not allowed'

    return errors


def is_supplied(payload: Mapping[str, Any], name: str) -> bool:
    """A field counts as supplied when present and not null."""
    return payload.get(name) is not None


def decimal_places(value: int | float) -> int:
    try:
        exponent = Decimal(str(value)).as_tuple().exponent
    except InvalidOperation:
        return 0
    return max(0, -exponent) if isinstance(exponent, int) else 0


def is_strict_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _check_field(rule: FieldRule, value: Any) -> Iterator[str]:
    label = f'"{rule.label}"'
    if value is None:
        if rule.required:
            yield f"{label} is required"
        return

    if rule.kind is RuleKind.AMOUNT:
        yield from _check_amount(label, value)
    elif rule.kind is RuleKind.CURRENCY:
        yield from _check_currency(label, value)
    else:
        yield from _check_string(label, value, rule.alphanumeric)


def _check_string(label: str, value: Any, alphanumeric: bool) -> Iterator[str]:
    if not isinstance(value, str):
        yield f"{label} must be a string"
        return
    if value == "":
        yield f"{label} is not allowed to be empty"
        return
    if alphanumeric and not ALPHANUMERIC_PATTERN.match(value):
        yield f"{label} must only contain alpha-numeric characters"


def _check_amount(label: str, value: Any) -> Iterator[str]:
    if not is_strict_number(value):
        yield f"{label} must be a number"
        return
    if value < 0:
        yield f"{label} must be greater than or equal to 0"
    if decimal_places(value) > AMOUNT_PRECISION:
        yield f"{label} must have no more than {AMOUNT_PRECISION} decimal places"


def _check_currency(label: str, value: Any) -> Iterator[str]:
    if not isinstance(value, str):
        yield f"{label} must be a string"
        return
    if value == "":
        yield f"{label} is not allowed to be empty"
        return
    if len(value) != CURRENCY_LENGTH:
        yield f"{label} length must be {CURRENCY_LENGTH} characters long"
    if not CURRENCY_PATTERN.match(value):
        yield (
            f'{label} with value "{value}" fails to match the required pattern: '
            f"/{CURRENCY_PATTERN.pattern}/"
        )
