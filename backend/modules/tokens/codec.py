"""
Token codec.

Parses, checks and creates compact signed tokens of the form
``header.payload.signature``. The client-side checks (``decode_claims``,
``is_expired``, ``is_expiring_soon``, ``is_valid_shape``) never raise and
never look at the signature. Signing and verification use PyJWT with HS256
and a shared secret.

The boolean helpers are projections of ``decode_claims``:

- ``is_expired`` is True when decoding fails
- ``is_expiring_soon`` is False when decoding fails

so an unparseable token is always treated as dead and never as due for
renewal.
"""

import base64
import binascii
import json
import logging
import time
from typing import Any, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from .exceptions import InvalidTokenError, SigningNotConfiguredError
from .models import DecodeResult, Err, Ok, TokenClaims

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_REFRESH_WINDOW_SECONDS = 600


def _now(now: Optional[float]) -> float:
    return time.time() if now is None else now


def _b64decode_json(segment: str) -> Any:
    """Decode one base64 (standard or URL-safe, padded or not) JSON segment."""
    normalized = segment.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    raw = base64.b64decode(normalized, validate=True)
    return json.loads(raw.decode("utf-8"))


def decode_claims(token: Any) -> DecodeResult:
    """
    Decode the payload segment of a token without verifying it.

    Args:
        token: Candidate token, any type

    Returns:
        Ok(claims) or Err(reason). Never raises.
    """
    if not token or not isinstance(token, str):
        return Err("missing")

    parts = token.split(".")
    if len(parts) != 3:
        return Err("segments")

    try:
        payload = _b64decode_json(parts[1])
    except (binascii.Error, ValueError, RecursionError):
        return Err("payload")

    if not isinstance(payload, dict):
        return Err("payload")

    try:
        return Ok(TokenClaims.model_validate(payload))
    except PydanticValidationError:
        return Err("claims")


def claims_expired(claims: TokenClaims, now: Optional[float] = None) -> bool:
    """True when ``now`` is at/after ``exp``, before ``iat``, or ``exp`` is absent."""
    now_seconds = int(_now(now))
    if claims.exp is None or now_seconds >= claims.exp:
        return True
    return claims.iat is not None and now_seconds < claims.iat


def is_expired(token: Any, now: Optional[float] = None) -> bool:
    """Whether a token is absent, unparseable, expired or not yet valid."""
    result = decode_claims(token)
    if isinstance(result, Err):
        return True
    return claims_expired(result.claims, now)


def is_expiring_soon(
    token: Any,
    window_seconds: int = DEFAULT_REFRESH_WINDOW_SECONDS,
    now: Optional[float] = None,
) -> bool:
    """Whether a parseable token is inside the refresh window before ``exp``."""
    result = decode_claims(token)
    if isinstance(result, Err) or result.claims.exp is None:
        return False
    now_ms = _now(now) * 1000
    return now_ms >= result.claims.exp * 1000 - window_seconds * 1000


def is_valid_shape(token: Any) -> bool:
    """Whether a token has three non-empty segments with JSON header and payload."""
    if not isinstance(token, str):
        return False

    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        return False

    try:
        _b64decode_json(parts[0])
        _b64decode_json(parts[1])
    except (binascii.Error, ValueError, RecursionError):
        return False
    return True


def sign(
    subject_id: int,
    ttl_seconds: int,
    secret: str,
    now: Optional[float] = None,
) -> str:
    """
    Create a signed token for an account.

    Args:
        subject_id: Account ID to embed as the ``id`` claim
        ttl_seconds: Lifetime; ``exp = iat + ttl_seconds``
        secret: Shared HS256 secret
        now: Issue time override (Unix seconds)

    Returns:
        Encoded token string
    """
    if not secret:
        raise SigningNotConfiguredError()

    issued_at = int(_now(now))
    payload = {
        "id": subject_id,
        "iat": issued_at,
        "exp": issued_at + ttl_seconds,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_signature(token: str, secret: str) -> TokenClaims:
    """
    Check the signature of a token and return its claims.

    Time claims are NOT checked here; see ``verify``.

    Raises:
        SigningNotConfiguredError: If no secret is configured
        InvalidTokenError: If the signature or claims are invalid
    """
    if not secret:
        raise SigningNotConfiguredError()

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"verify_exp": False, "verify_iat": False, "require": ["id"]},
        )
        return TokenClaims.model_validate(payload)
    except jwt.InvalidTokenError as e:
        logger.debug(f"Token signature rejected: {e}")
        raise InvalidTokenError()
    except PydanticValidationError:
        raise InvalidTokenError()


def verify(token: str, secret: str, now: Optional[float] = None) -> TokenClaims:
    """
    Check signature and time claims.

    Malformed and expired tokens raise the same error.
    """
    claims = verify_signature(token, secret)
    if claims.id is None or claims_expired(claims, now):
        raise InvalidTokenError()
    return claims
