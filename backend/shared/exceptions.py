"""
Base exception classes for the Services Hub backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps every base class to an HTTP status through ``status_code``.
"""

from typing import Optional, Any


class HubError(Exception):
    """
    Base exception for all Services Hub errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


class ValidationError(HubError):
    """Input validation failed."""

    status_code = 400


class AuthenticationError(HubError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(HubError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class NotFoundError(HubError):
    """Resource not found."""

    status_code = 404


class ConflictError(HubError):
    """Resource already exists."""

    status_code = 409
