"""Access Tokens — bearer extraction and the per-request access decision.

Tests cover:
    - Only well-formed 'Bearer <token>' headers yield a token
    - Issued tokens are admitted
    - Bad signature, garbage, expired tokens → INVALID_TOKEN
    - Wrong or missing apiKey claim → CLAIM_MISMATCH
    - Unconfigured secret/api key admits nobody
    - Issuer enforced only when configured
"""

from datetime import timedelta

import jwt
import pytest

from fxledger.config import Settings
from fxledger.infrastructure.access_tokens import (
    AccessDecision,
    evaluate_access,
    extract_bearer_token,
    issue_access_token,
)


SECRET = "unit-test-secret-that-is-long-enough-0001"


@pytest.fixture
def settings():
    return Settings(app_access_api_key="shared-key", app_jwt_secret=SECRET)


def _bearer(token: str) -> str:
    return f"Bearer {token}"


# ─── extract_bearer_token ────────────────────────────────────────

@pytest.mark.parametrize("header,expected", [
    ("Bearer abc.def.ghi", "abc.def.ghi"),
    ("bearer abc", "abc"),
    ("  Bearer   abc  ", "abc"),
    ("abc", None),
    ("Basic abc", None),
    ("Bearer", None),
    ("Bearer a b", None),
    ("", None),
    (None, None),
])
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


# ─── evaluate_access ─────────────────────────────────────────────

def test_issued_token_is_admitted(settings):
    token = issue_access_token(settings)
    assert evaluate_access(_bearer(token), settings) is AccessDecision.ADMITTED


def test_missing_header_is_no_token(settings):
    assert evaluate_access(None, settings) is AccessDecision.NO_TOKEN
    assert evaluate_access("   ", settings) is AccessDecision.NO_TOKEN


@pytest.mark.parametrize("scheme", ["Basic", "Token", ""])
def test_present_header_with_wrong_scheme_is_invalid(settings, scheme):
    header = f"{scheme} {issue_access_token(settings)}".strip()
    assert evaluate_access(header, settings) is AccessDecision.INVALID_TOKEN


def test_wrong_signature_is_invalid(settings):
    token = jwt.encode({"apiKey": "shared-key"}, "another-secret-that-is-long-enough-02", algorithm="HS256")
    assert evaluate_access(_bearer(token), settings) is AccessDecision.INVALID_TOKEN


def test_garbage_token_is_invalid(settings):
    assert evaluate_access("Bearer not-a-jwt", settings) is AccessDecision.INVALID_TOKEN


def test_expired_token_is_invalid(settings):
    token = issue_access_token(settings, expires_in=timedelta(seconds=-10))
    assert evaluate_access(_bearer(token), settings) is AccessDecision.INVALID_TOKEN


def test_mismatched_api_key_claim(settings):
    token = jwt.encode({"apiKey": "other-key"}, SECRET, algorithm="HS256")
    assert evaluate_access(_bearer(token), settings) is AccessDecision.CLAIM_MISMATCH


def test_missing_api_key_claim(settings):
    token = jwt.encode({"user": "someone"}, SECRET, algorithm="HS256")
    assert evaluate_access(_bearer(token), settings) is AccessDecision.CLAIM_MISMATCH


def test_unconfigured_secret_rejects_everything(settings):
    token = issue_access_token(settings)
    unconfigured = Settings(app_access_api_key="shared-key", app_jwt_secret="")
    assert evaluate_access(_bearer(token), unconfigured) is AccessDecision.INVALID_TOKEN


def test_unconfigured_api_key_rejects_everything():
    settings = Settings(app_access_api_key="", app_jwt_secret=SECRET)
    token = jwt.encode({"apiKey": ""}, SECRET, algorithm="HS256")
    assert evaluate_access(_bearer(token), settings) is AccessDecision.CLAIM_MISMATCH


def test_issuer_enforced_when_configured():
    issuing = Settings(
        app_access_api_key="shared-key", app_jwt_secret=SECRET,
        app_jwt_issuer="FX Transactions", app_jwt_subject="ops@example.com",
    )
    token = issue_access_token(issuing)
    assert evaluate_access(_bearer(token), issuing) is AccessDecision.ADMITTED

    other = issuing.model_copy(update={"app_jwt_issuer": "Someone Else"})
    assert evaluate_access(_bearer(token), other) is AccessDecision.INVALID_TOKEN
