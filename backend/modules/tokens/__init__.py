"""
Token module.

Pure functions for parsing, checking and signing compact tokens.

Public API:
- decode_claims, is_expired, is_expiring_soon, is_valid_shape
- sign, verify, verify_signature (server side)
- TokenClaims, Ok, Err
- Token exceptions: InvalidTokenError, MissingTokenError, TokenTooOldError
"""

from .codec import (
    decode_claims,
    claims_expired,
    is_expired,
    is_expiring_soon,
    is_valid_shape,
    sign,
    verify,
    verify_signature,
)
from .models import TokenClaims, Ok, Err, DecodeResult
from .exceptions import (
    InvalidTokenError,
    MissingTokenError,
    TokenTooOldError,
    SigningNotConfiguredError,
)

__all__ = [
    # Codec
    "decode_claims",
    "claims_expired",
    "is_expired",
    "is_expiring_soon",
    "is_valid_shape",
    "sign",
    "verify",
    "verify_signature",
    # Models
    "TokenClaims",
    "Ok",
    "Err",
    "DecodeResult",
    # Exceptions
    "InvalidTokenError",
    "MissingTokenError",
    "TokenTooOldError",
    "SigningNotConfiguredError",
]
