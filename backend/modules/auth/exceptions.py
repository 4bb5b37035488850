"""
Authorization module exceptions.

Token failures are defined in ``modules.tokens``; this module adds the
privilege and redirect outcomes of the request gate.
"""

from shared.exceptions import AuthorizationError, HubError


class InsufficientPermissionsError(AuthorizationError):
    """Raised when a verified account fails a role/subscription predicate."""

    def __init__(self, message: str, required: str, role: str, subscription: str):
        super().__init__(
            message,
            code="INSUFFICIENT_PERMISSIONS",
            details={
                "required": required,
                "role": role,
                "subscription": subscription,
            },
        )


class LoginRedirect(HubError):
    """Raised by page dependencies to send the browser to the login page."""

    status_code = 302

    def __init__(self, location: str = "/login", reason: str = "Login required"):
        super().__init__(reason, code="LOGIN_REDIRECT", details={"location": location})
        self.location = location
