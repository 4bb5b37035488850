"""
Browser-side session package.

Client half of the token lifecycle: where a client finds its token, when it
refreshes it, and how outbound requests carry it.

Public API:
- SessionContext: Per-client state
- TokenLifecycleManager: Refresh timer, visibility recovery, auth headers
- AuthenticatedClient, create_client: httpx wrapper with header injection
- resolve_token, parse_cookie_token: Ordered token providers
"""

from .activity import ACTIVITY_EVENTS, ActivityTracker, EventHub, EventTarget
from .client import AuthenticatedClient, create_client
from .config import ClientSettings, get_client_settings
from .lifecycle import TokenLifecycleManager
from .providers import (
    DEFAULT_PROVIDERS,
    parse_cookie_token,
    resolve_token,
    resolve_token_source,
)
from .session import SessionContext
from .storage import JSONFileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "ACTIVITY_EVENTS",
    "ActivityTracker",
    "EventHub",
    "EventTarget",
    "AuthenticatedClient",
    "create_client",
    "ClientSettings",
    "get_client_settings",
    "TokenLifecycleManager",
    "DEFAULT_PROVIDERS",
    "parse_cookie_token",
    "resolve_token",
    "resolve_token_source",
    "SessionContext",
    "JSONFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
]
