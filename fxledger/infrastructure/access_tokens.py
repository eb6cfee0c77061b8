"""Access Tokens — bearer extraction, JWT verification and issuing for the access guard.

Invariants:
    - evaluate_access is stateless: NoToken | InvalidToken | ClaimMismatch | Admitted
    - NoToken only when the header is absent or blank; a present header without a
      well-formed Bearer token is InvalidToken
    - A token is admitted only if its signature verifies AND its apiKey claim equals
      the configured shared key (constant-time comparison)
    - An unset secret or api key admits nobody
    - No retry, no caching of decisions

Design Decisions:
    - PyJWT for signing/verification (HS256 by default, algorithm pinned on decode)
    - Issuer verified only when APP_JWT_ISSUER is configured
"""

import hmac
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum

import jwt

from fxledger.config import Settings

logger = logging.getLogger(__name__)

API_KEY_CLAIM = "apiKey"
DEFAULT_TOKEN_LIFETIME = timedelta(days=360)


class AccessDecision(str, Enum):
    """Terminal states of the per-request access check."""
    NO_TOKEN = "no_token"
    INVALID_TOKEN = "invalid_token"
    CLAIM_MISMATCH = "claim_mismatch"
    ADMITTED = "admitted"


def extract_bearer_token(authorization: str | None) -> str | None:
    """'Bearer <token>' -> '<token>'. Anything else -> None."""
    if not authorization:
        return None
    parts = authorization.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def decode_access_token(token: str, settings: Settings) -> dict | None:
    """Verify signature (and issuer when configured). Returns claims or None."""
    if not settings.app_jwt_secret:
        logger.warning("APP_JWT_SECRET is not configured; rejecting token")
        return None
    options = {"verify_iss": settings.app_jwt_issuer is not None}
    try:
        return jwt.decode(
            token,
            settings.app_jwt_secret,
            algorithms=[settings.app_jwt_algorithm],
            issuer=settings.app_jwt_issuer,
            options=options,
        )
    except jwt.PyJWTError as e:
        logger.info(f"Access token rejected: {type(e).__name__}")
        return None


def evaluate_access(authorization: str | None, settings: Settings) -> AccessDecision:
    if not authorization or not authorization.strip():
        return AccessDecision.NO_TOKEN
    token = extract_bearer_token(authorization)
    if not token:
        return AccessDecision.INVALID_TOKEN

    claims = decode_access_token(token, settings)
    if claims is None:
        return AccessDecision.INVALID_TOKEN

    presented = claims.get(API_KEY_CLAIM)
    if (
        not settings.app_access_api_key
        or not isinstance(presented, str)
        or not hmac.compare_digest(presented, settings.app_access_api_key)
    ):
        return AccessDecision.CLAIM_MISMATCH

    return AccessDecision.ADMITTED


def issue_access_token(
    settings: Settings, expires_in: timedelta = DEFAULT_TOKEN_LIFETIME,
) -> str:
    """Sign a token carrying the shared api key claim."""
    payload: dict = {
        API_KEY_CLAIM: settings.app_access_api_key,
        "iat": datetime.now(timezone.utc),
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    if settings.app_jwt_issuer:
        payload["iss"] = settings.app_jwt_issuer
    if settings.app_jwt_subject:
        payload["sub"] = settings.app_jwt_subject
    return jwt.encode(
        payload, settings.app_jwt_secret, algorithm=settings.app_jwt_algorithm,
    )
