"""
HTTP client that attaches session credentials.

All call sites go through ``AuthenticatedClient.request`` (or the verb
helpers). Requests get the lifecycle manager's auth headers unless marked
``internal_auth``, and an unauthorized outcome, whether a 401 response or an
``HTTPStatusError`` carrying one, sends the client to login.
"""

import logging
from typing import Any, Optional

import httpx

from .config import ClientSettings, get_client_settings
from .lifecycle import TokenLifecycleManager
from .session import SessionContext
from .storage import JSONFileStorage, MemoryStorage

logger = logging.getLogger(__name__)


def _is_unauthorized(error: BaseException) -> bool:
    return (
        isinstance(error, httpx.HTTPStatusError)
        and error.response.status_code == httpx.codes.UNAUTHORIZED
    )


class AuthenticatedClient:
    """Wraps the manager's ``httpx.AsyncClient``."""

    def __init__(self, manager: TokenLifecycleManager):
        self._manager = manager

    @property
    def manager(self) -> TokenLifecycleManager:
        return self._manager

    async def request(
        self,
        method: str,
        url: str,
        *,
        internal_auth: bool = False,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Send a request with auth headers.

        Args:
            internal_auth: Skip header injection and 401 handling; used for
                calls to the auth endpoints themselves

        Raises:
            httpx.HTTPError: Transport or status errors are re-raised after
                the unauthorized check
        """
        if internal_auth:
            return await self._manager.http.request(method, url, **kwargs)

        headers = dict(kwargs.pop("headers", None) or {})
        headers.update(self._manager.auth_headers())

        try:
            response = await self._manager.http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            if _is_unauthorized(e):
                self._manager.handle_unauthorized()
            raise

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.info(f"Unauthorized response from {method} {url}")
            self._manager.handle_unauthorized()
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def aclose(self) -> None:
        self._manager.teardown()
        await self._manager.http.aclose()

    async def __aenter__(self) -> "AuthenticatedClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()


def create_client(
    context: Optional[SessionContext] = None,
    settings: Optional[ClientSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AuthenticatedClient:
    """
    Build a client, its lifecycle manager and its session context.

    Durable storage is a JSON file when ``settings.storage_path`` is set and
    process memory otherwise.
    """
    settings = settings or get_client_settings()
    if context is None:
        storage = (
            JSONFileStorage(settings.storage_path) if settings.storage_path else MemoryStorage()
        )
        context = SessionContext(storage=storage)

    http = httpx.AsyncClient(base_url=settings.base_url, transport=transport)
    return AuthenticatedClient(TokenLifecycleManager(context, http, settings))
