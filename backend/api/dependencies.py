"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The account store is process memory, so the container owns the only copy
of every account; ``reset_container()`` starts from an empty store.
"""

from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.accounts.interfaces import IAccountStore
    from modules.accounts.service import AccountService
    from modules.auth.service import AuthService
    from modules.stories.service import StoryService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._account_store: "IAccountStore | None" = None
        self._account_service: "AccountService | None" = None
        self._auth_service: "AuthService | None" = None
        self._story_service: "StoryService | None" = None
        self.admin_email: str = get_settings().admin_email

    @property
    def account_store(self) -> "IAccountStore":
        """Get the account store instance."""
        if self._account_store is None:
            from modules.accounts.store import InMemoryAccountStore
            self._account_store = InMemoryAccountStore()
        return self._account_store

    @property
    def accounts(self) -> "AccountService":
        """Get the account service instance."""
        if self._account_service is None:
            from modules.accounts.service import AccountService
            self._account_service = AccountService(self.account_store)
        return self._account_service

    @property
    def auth(self) -> "AuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.accounts, get_settings())
        return self._auth_service

    @property
    def stories(self) -> "StoryService":
        """Get the story service instance."""
        if self._story_service is None:
            from modules.stories.service import StoryService
            self._story_service = StoryService()
        return self._story_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._account_store = None
        self._account_service = None
        self._auth_service = None
        self._story_service = None
        self.admin_email = get_settings().admin_email


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_account_service() -> "AccountService":
    """FastAPI dependency for account service."""
    return get_container().accounts


def get_auth_service() -> "AuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_story_service() -> "StoryService":
    """FastAPI dependency for story service."""
    return get_container().stories
