"""
Client token providers.

Each provider looks in one place for a token. ``resolve_token`` tries them
in order and returns the first non-empty hit, so precedence is just the
order of ``DEFAULT_PROVIDERS``: durable storage, then the in-memory token,
then the ``token`` cookie.
"""

from typing import Callable, Optional, Sequence

from .session import SessionContext
from .storage import TOKEN_KEY

TokenProvider = Callable[[SessionContext], Optional[str]]


def parse_cookie_token(cookie_string: str, name: str = TOKEN_KEY) -> Optional[str]:
    """
    First ``name=value`` pair in a cookie string, scanning left to right.

    Whitespace around each pair is ignored.
    """
    for pair in cookie_string.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep and key == name:
            return value
    return None


def from_storage(context: SessionContext) -> Optional[str]:
    return context.storage.get_item(TOKEN_KEY)


def from_memory(context: SessionContext) -> Optional[str]:
    return context.memory_token


def from_cookie(context: SessionContext) -> Optional[str]:
    return parse_cookie_token(context.cookie_string)


DEFAULT_PROVIDERS: tuple[tuple[str, TokenProvider], ...] = (
    ("storage", from_storage),
    ("memory", from_memory),
    ("cookie", from_cookie),
)


def resolve_token_source(
    context: SessionContext,
    providers: Sequence[tuple[str, TokenProvider]] = DEFAULT_PROVIDERS,
) -> Optional[tuple[str, str]]:
    """Name of the winning provider and its token, or None."""
    for name, provider in providers:
        token = provider(context)
        if token:
            return name, token
    return None


def resolve_token(
    context: SessionContext,
    providers: Sequence[tuple[str, TokenProvider]] = DEFAULT_PROVIDERS,
) -> Optional[str]:
    found = resolve_token_source(context, providers)
    return found[1] if found else None
