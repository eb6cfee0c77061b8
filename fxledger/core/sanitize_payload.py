"""Payload Sanitizer — trims and percent-decodes string leaves of nested request payloads.

Invariants:
    - PURE: returns a sanitized copy, the caller's mapping is never mutated
    - Every string leaf is trimmed; a trimmed leaf containing '%' is
      percent-decoded and trimmed again
    - Nested mappings recurse; lists, numbers, bools and None pass through unchanged
    - Malformed escapes are left as-is (never raises)
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote


def sanitize_value(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        if "%" in value:
            value = unquote(value).strip()
        return value
    if isinstance(value, Mapping):
        return {key: sanitize_value(item) for key, item in value.items()}
    return value


def sanitize_payload(payload: Mapping[str, Any] | None) -> Any:
    """Return a sanitized copy of a request payload. Empty input is returned unchanged."""
    if not payload or not isinstance(payload, Mapping):
        return payload
    return {key: sanitize_value(item) for key, item in payload.items()}
