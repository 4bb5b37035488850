"""
In-memory account store.

Every mutation is a single synchronous list operation, so a request that
awaits between a lookup and a write can interleave with another request but
never observes a half-applied change.
"""

from typing import Iterable, Optional

from .interfaces import IAccountStore
from .models import Account, OAuthProvider, Role


class InMemoryAccountStore(IAccountStore):
    """List-backed store; IDs come from a counter and are never reused."""

    def __init__(self, accounts: Optional[Iterable[Account]] = None):
        self._accounts: list[Account] = list(accounts or [])
        self._last_id = max((a.id for a in self._accounts), default=0)

    def next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def add(self, account: Account) -> Account:
        self._accounts.append(account)
        self._last_id = max(self._last_id, account.id)
        return account

    def get(self, account_id: int) -> Optional[Account]:
        return next((a for a in self._accounts if a.id == account_id), None)

    def find_by_username(self, username: str) -> Optional[Account]:
        return next((a for a in self._accounts if a.username == username), None)

    def find_by_email(self, email: str) -> Optional[Account]:
        return next((a for a in self._accounts if a.email == email), None)

    def find_by_provider(self, provider: OAuthProvider, provider_id: str) -> Optional[Account]:
        return next(
            (a for a in self._accounts if a.provider_id(provider) == provider_id),
            None,
        )

    def find_admin(self) -> Optional[Account]:
        return next((a for a in self._accounts if a.role is Role.ADMIN), None)

    def remove_by_email(self, email: str) -> bool:
        for index, account in enumerate(self._accounts):
            if account.email == email:
                del self._accounts[index]
                return True
        return False

    def all(self) -> Iterable[Account]:
        return list(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)
