"""
Account module exceptions.

These exceptions are raised by the account service and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class AccountNotFoundError(NotFoundError):
    """Raised when a token references an account that does not exist."""

    def __init__(self, account_id: int):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"account_id": account_id},
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when a username/password pair does not match."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class DuplicateUsernameError(ConflictError):
    """Raised when a username is already taken."""

    def __init__(self, username: str):
        super().__init__(
            "Username already exists",
            code="DUPLICATE_USERNAME",
            details={"username": username},
        )


class DuplicateEmailError(ConflictError):
    """Raised when an email is already taken."""

    def __init__(self, email: str):
        super().__init__(
            "Email already exists",
            code="DUPLICATE_EMAIL",
            details={"email": email},
        )


class InvalidPlanError(ValidationError):
    """Raised when a subscription upgrade names an unknown plan."""

    def __init__(self, plan: str):
        super().__init__("Invalid plan", code="INVALID_PLAN", details={"plan": plan})


class InvalidPackageError(ValidationError):
    """Raised when a credit purchase does not match a known package."""

    def __init__(self, credits: int, price: float):
        super().__init__(
            "Invalid package",
            code="INVALID_PACKAGE",
            details={"credits": credits, "price": price},
        )
