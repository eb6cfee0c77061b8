"""Transaction Normalizer — converts validated payloads into canonical storage form.

Invariants:
    - PURE: id and "now" are supplied by the caller (shell owns clock and randomness)
    - Amounts are rounded half-up to exactly 2 decimals on their decimal string form
    - Strings (customerId, currencies) are trimmed
    - Create sets created* and updated* to the same instant
    - Update partials contain only supplied mutable fields plus refreshed updated*
    - id, created and createdTimestamp are never part of an update partial
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from fxledger.core.domain_types import TransactionId
from fxledger.core.enforce_fields import MUTABLE_FIELDS, is_supplied


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
_CENTS = Decimal("0.01")

AMOUNT_FIELDS = ("fromAmount", "toAmount")
STRING_FIELDS = ("customerId", "fromCurrency", "toCurrency")


def round_amount(value: int | float | str) -> float:
    """Round to 2 decimals using the value's decimal string form (1.005 -> 1.01).

    Precision grows with the magnitude so amounts past 28 significant digits still quantize.
    """
    amount = Decimal(str(value).strip())
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return float(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))


def format_timestamp(now: datetime) -> str:
    return _as_utc(now).strftime(TIMESTAMP_FORMAT)


def epoch_millis(now: datetime) -> int:
    return int(_as_utc(now).timestamp() * 1000)


def stamp(prefix: str, now: datetime) -> dict[str, Any]:
    """{prefix: 'YYYY-MM-DD HH:MM:SS', prefixTimestamp: epoch ms}."""
    return {prefix: format_timestamp(now), f"{prefix}Timestamp": epoch_millis(now)}


def normalize_new_transaction(
    payload: Mapping[str, Any], transaction_id: TransactionId, now: datetime,
) -> dict[str, Any]:
    """Build the full canonical record for a validated create payload."""
    record: dict[str, Any] = {"id": str(transaction_id)}
    record.update(_normalize_fields(payload, MUTABLE_FIELDS))
    record.update(stamp("created", now))
    record.update(stamp("updated", now))
    return record


def normalize_transaction_update(
    payload: Mapping[str, Any], now: datetime,
) -> dict[str, Any]:
    """Build the partial record for a validated update payload."""
    supplied = tuple(name for name in MUTABLE_FIELDS if is_supplied(payload, name))
    partial = _normalize_fields(payload, supplied)
    partial.update(stamp("updated", now))
    return partial


def _normalize_fields(payload: Mapping[str, Any], names: tuple[str, ...]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for name in names:
        value = payload[name]
        if name in AMOUNT_FIELDS:
            normalized[name] = round_amount(value)
        elif name in STRING_FIELDS:
            normalized[name] = value.strip()
    return normalized


def _as_utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)
