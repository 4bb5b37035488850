"""
Token module exceptions.

Only the server-side ``verify`` path raises; the shape and expiry helpers
never do. Malformed and expired tokens share one message on purpose so the
response does not tell a caller which check failed.
"""

from shared.exceptions import AuthenticationError


class InvalidTokenError(AuthenticationError):
    """Raised when a token fails signature, shape or time checks."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, code="INVALID_TOKEN")


class MissingTokenError(AuthenticationError):
    """Raised when no token could be resolved from the request."""

    def __init__(self, message: str = "No token"):
        super().__init__(message, code="MISSING_TOKEN")


class TokenTooOldError(AuthenticationError):
    """Raised when a token expired longer ago than the refresh grace window."""

    def __init__(self, expired_for_seconds: int, grace_seconds: int):
        super().__init__(
            "Token too old to refresh",
            code="TOKEN_TOO_OLD",
            details={
                "expired_for_seconds": expired_for_seconds,
                "grace_seconds": grace_seconds,
            },
        )


class SigningNotConfiguredError(AuthenticationError):
    """Raised when the server has no signing secret."""

    def __init__(self):
        super().__init__(
            "Server authentication not configured",
            code="AUTH_NOT_CONFIGURED",
        )
