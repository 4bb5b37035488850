"""
Account module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. The store is swappable for a persistent one later; the
service is what route handlers use.
"""

from typing import Iterable, Optional, Protocol, runtime_checkable

from .models import Account, OAuthProfile, OAuthProvider, ProfileUpdate


@runtime_checkable
class IAccountStore(Protocol):
    """Keyed collection of accounts."""

    def next_id(self) -> int:
        """Reserve and return a fresh account ID."""
        ...

    def add(self, account: Account) -> Account:
        ...

    def get(self, account_id: int) -> Optional[Account]:
        ...

    def find_by_username(self, username: str) -> Optional[Account]:
        ...

    def find_by_email(self, email: str) -> Optional[Account]:
        ...

    def find_by_provider(self, provider: OAuthProvider, provider_id: str) -> Optional[Account]:
        ...

    def find_admin(self) -> Optional[Account]:
        ...

    def remove_by_email(self, email: str) -> bool:
        """Delete the account with this email. Returns whether one existed."""
        ...

    def all(self) -> Iterable[Account]:
        ...


@runtime_checkable
class IAccountService(Protocol):
    """
    Interface for account operations.

    Raises module exceptions (DuplicateUsernameError, InvalidCredentialsError,
    AccountNotFoundError, ...) rather than returning status flags.
    """

    async def register(self, username: str, email: str, password: str) -> Account:
        ...

    async def authenticate(self, username: str, password: str) -> Account:
        ...

    async def get_account(self, account_id: int) -> Account:
        ...

    async def link_oauth(self, profile: OAuthProfile) -> Account:
        ...

    async def update_profile(self, account_id: int, update: ProfileUpdate) -> Account:
        ...

    async def delete_by_email(self, email: str) -> bool:
        ...
