"""Response Envelope — the uniform {success, data} / {success: false, errors} body.

Invariants:
    - data is omitted only when the payload is None (0, "0" and "" are kept)
    - The envelope never carries an HTTP status; callers choose it
    - Metadata keys are merged at top level and never override success/data/errors
"""

from typing import Any


def envelope(success: bool, payload: Any = None, **meta: Any) -> dict:
    body: dict[str, Any] = {"success": bool(success)}
    if payload is not None:
        body["data" if success else "errors"] = payload
    for key, value in meta.items():
        body.setdefault(key, value)
    return body


def success_envelope(data: Any = None, **meta: Any) -> dict:
    return envelope(True, data, **meta)


def failure_envelope(errors: dict[str, str]) -> dict:
    return envelope(False, errors)
