"""
Authentication service implementation.

Issues and verifies HS256 tokens for in-memory accounts, and re-signs tokens
at the refresh endpoint within a configurable grace window after expiry.
"""

import logging
import time
from typing import Callable, Optional

from shared.config import Settings, get_settings
from shared.exceptions import AuthenticationError
from shared.logging_config import mask_token
from modules.accounts.models import Account
from modules.accounts.service import AccountService
from modules.tokens import codec
from modules.tokens.exceptions import (
    InvalidTokenError,
    MissingTokenError,
    TokenTooOldError,
)
from modules.tokens.models import TokenClaims

from .exceptions import InsufficientPermissionsError
from .interfaces import IAuthService
from .policy import has_admin_access, has_full_access

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Accounts come from an AccountService; signing policy from Settings.
    ``clock`` returns Unix seconds and exists so tests can move time.
    """

    def __init__(
        self,
        accounts: AccountService,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._accounts = accounts
        self._settings = settings or get_settings()
        self._clock = clock

    @property
    def accounts(self) -> AccountService:
        return self._accounts

    def issue_token(self, account: Account) -> str:
        return codec.sign(
            account.id,
            self._settings.token_ttl_seconds,
            self._settings.jwt_secret,
            now=self._clock(),
        )

    def verify_token(self, token: Optional[str]) -> TokenClaims:
        if not token:
            raise MissingTokenError()
        return codec.verify(token, self._settings.jwt_secret, now=self._clock())

    async def authenticate_token(self, token: Optional[str]) -> Account:
        claims = self.verify_token(token)
        return await self._accounts.get_account(claims.id)

    async def find_account(self, token: Optional[str]) -> Optional[Account]:
        """Like ``authenticate_token`` but returns None on any failure."""
        if not token:
            return None
        try:
            claims = self.verify_token(token)
        except AuthenticationError:
            return None
        return self._accounts.store.get(claims.id)

    async def login(self, username: str, password: str) -> tuple[Account, str]:
        account = await self._accounts.authenticate(username, password)
        token = self.issue_token(account)
        logger.info(f"Login successful for {username}, token {mask_token(token)}")
        return account, token

    async def refresh(self, token: Optional[str]) -> str:
        """
        Re-sign a token for the same subject.

        The signature must verify. Expiry is tolerated for up to
        ``refresh_grace_seconds``; older tokens are refused outright.
        """
        if not token:
            raise MissingTokenError()

        claims = codec.verify_signature(token, self._settings.jwt_secret)
        if claims.id is None:
            raise InvalidTokenError()

        now = self._clock()
        if claims.iat is not None and now < claims.iat:
            raise InvalidTokenError()

        if claims.exp is not None:
            expired_for = int(now - claims.exp)
            if expired_for > self._settings.refresh_grace_seconds:
                logger.info(f"Refresh refused, token expired {expired_for}s ago")
                raise TokenTooOldError(expired_for, self._settings.refresh_grace_seconds)

        account = await self._accounts.get_account(claims.id)
        return self.issue_token(account)

    @staticmethod
    def require_full_access(account: Account) -> Account:
        if not has_full_access(account):
            raise InsufficientPermissionsError(
                "Full subscription required",
                required="full",
                role=account.role.value,
                subscription=account.subscription.value,
            )
        return account

    @staticmethod
    def require_admin(account: Account) -> Account:
        if not has_admin_access(account):
            raise InsufficientPermissionsError(
                "Admin access required",
                required="admin",
                role=account.role.value,
                subscription=account.subscription.value,
            )
        return account

