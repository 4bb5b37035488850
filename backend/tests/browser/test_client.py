"""Tests for browser/client.py."""

import httpx
import pytest

from browser.client import AuthenticatedClient, create_client
from browser.config import ClientSettings
from browser.lifecycle import TokenLifecycleManager
from browser.session import SessionContext
from browser.storage import JSONFileStorage, MemoryStorage


NOW = 1_700_000_000


def build_client(context, handler) -> AuthenticatedClient:
    settings = ClientSettings(base_url="http://hub.test")
    http = httpx.AsyncClient(base_url=settings.base_url, transport=httpx.MockTransport(handler))
    return AuthenticatedClient(TokenLifecycleManager(context, http, settings, clock=lambda: NOW))


class TestAuthenticatedClient:
    @pytest.mark.asyncio
    async def test_injects_bearer(self, unsigned_token):
        """Requests carry the current token."""
        token = unsigned_token({"exp": NOW + 3600})
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        async with build_client(SessionContext(storage=MemoryStorage({"token": token})), handler) as client:
            response = await client.get("/story/generate", headers={"Accept": "application/json"})

        assert response.status_code == 200
        assert seen[0].headers["Authorization"] == f"Bearer {token}"
        assert seen[0].headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_injects_guest_marker(self):
        """Guests send X-User-Type instead of a token."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        context = SessionContext(storage=MemoryStorage({"userType": "guest"}))
        async with build_client(context, handler) as client:
            await client.get("/math")

        assert seen[0].headers["X-User-Type"] == "guest"
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_internal_auth_skips_headers(self, unsigned_token):
        """Calls to the auth endpoints are sent untouched."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(401, json={"error": "Invalid token"})

        visited = []
        context = SessionContext(
            storage=MemoryStorage({"token": unsigned_token({"exp": NOW + 3600})}),
            location="/profile",
            on_navigate=visited.append,
        )
        async with build_client(context, handler) as client:
            response = await client.post("/auth/login", json={"username": "a"}, internal_auth=True)

        assert response.status_code == 401
        assert "Authorization" not in seen[0].headers
        assert visited == []

    @pytest.mark.asyncio
    async def test_unauthorized_response_redirects(self, unsigned_token):
        """A 401 clears a dead token and goes to login."""
        storage = MemoryStorage({"token": unsigned_token({"exp": NOW - 10}), "userType": "user"})
        visited = []
        context = SessionContext(storage=storage, location="/story-generator", on_navigate=visited.append)

        async with build_client(context, lambda request: httpx.Response(401)) as client:
            response = await client.post("/story/generate", json={})

        assert response.status_code == 401
        assert storage.get_item("token") is None
        assert visited == ["/login"]

    @pytest.mark.asyncio
    async def test_unauthorized_on_login_page(self):
        """No redirect loop from the login page."""
        visited = []
        context = SessionContext(location="/login", on_navigate=visited.append)

        async with build_client(context, lambda request: httpx.Response(401)) as client:
            await client.get("/auth/whoami")

        assert visited == []

    @pytest.mark.asyncio
    async def test_unauthorized_status_error(self, unsigned_token):
        """An HTTPStatusError carrying a 401 also redirects and is re-raised."""

        def handler(request):
            response = httpx.Response(401, request=request)
            raise httpx.HTTPStatusError("Unauthorized", request=request, response=response)

        visited = []
        context = SessionContext(location="/math", on_navigate=visited.append)
        async with build_client(context, handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get("/api/data")

        assert visited == ["/login"]

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        """Transport errors are re-raised without navigation."""

        def handler(request):
            raise httpx.ConnectError("Network error")

        visited = []
        context = SessionContext(location="/math", on_navigate=visited.append)
        async with build_client(context, handler) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get("/api/data")

        assert visited == []

    @pytest.mark.asyncio
    async def test_other_statuses_pass_through(self):
        """Non-401 failures are returned as-is."""
        visited = []
        context = SessionContext(location="/math", on_navigate=visited.append)
        async with build_client(context, lambda request: httpx.Response(403)) as client:
            response = await client.get("/story/generate")

        assert response.status_code == 403
        assert visited == []


class TestCreateClient:
    @pytest.mark.asyncio
    async def test_memory_storage_by_default(self):
        """Without a storage path the session lives in memory."""
        client = create_client(settings=ClientSettings(base_url="http://hub.test"))
        assert isinstance(client.manager.context.storage, MemoryStorage)
        assert client.manager.http.base_url.host == "hub.test"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_file_storage(self, tmp_path):
        """A storage path selects JSON file storage."""
        settings = ClientSettings(base_url="http://hub.test", storage_path=str(tmp_path / "session.json"))
        client = create_client(settings=settings)
        assert isinstance(client.manager.context.storage, JSONFileStorage)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_uses_given_context_and_transport(self):
        """A caller-provided context and transport are used as-is."""
        context = SessionContext(location="/math")
        transport = httpx.MockTransport(lambda request: httpx.Response(204))
        async with create_client(context, ClientSettings(base_url="http://hub.test"), transport) as client:
            response = await client.get("/auth/whoami")
        assert client.manager.context is context
        assert response.status_code == 204
