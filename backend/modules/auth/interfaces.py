"""
Authentication module interface.

Route handlers depend on IAuthService, not the concrete implementation.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.accounts.models import Account
from modules.tokens.models import TokenClaims


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for token issuance and verification.

    Implementations raise the token module's exceptions on failure.
    """

    def issue_token(self, account: Account) -> str:
        """Sign a new token for an account."""
        ...

    def verify_token(self, token: Optional[str]) -> TokenClaims:
        """
        Check signature and time claims.

        Raises:
            MissingTokenError: If token is empty
            InvalidTokenError: If token is malformed, tampered or expired
        """
        ...

    async def authenticate_token(self, token: Optional[str]) -> Account:
        """
        Verify a token and load its account.

        Raises:
            AccountNotFoundError: If the subject no longer exists
        """
        ...

    async def login(self, username: str, password: str) -> tuple[Account, str]:
        ...

    async def refresh(self, token: Optional[str]) -> str:
        """
        Re-sign a token that is valid or expired within the grace window.

        Raises:
            TokenTooOldError: If it expired longer ago than the grace window
        """
        ...
