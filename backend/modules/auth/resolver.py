"""
Server-side token source resolution.

Precedence on a request:

1. ``Authorization`` header (everything after the first space)
2. ``token`` query parameter, only where the caller opts in
3. ``token`` cookie

Guest mode is a separate signal and never yields a token.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from starlette.requests import Request

TOKEN_PARAM = "token"
GUEST_HEADER = "x-user-type"
GUEST_QUERY_PARAM = "guest"
GUEST_VALUE = "guest"


class TokenCarrier(str, Enum):
    """Where a request token was found."""

    HEADER = "header"
    QUERY = "query"
    COOKIE = "cookie"


@dataclass(frozen=True)
class ResolvedToken:
    """A token together with the carrier it came from."""

    value: str
    carrier: TokenCarrier


def bearer_from_header(authorization: Optional[str]) -> Optional[str]:
    """Return the credential part of an Authorization header value."""
    if not authorization:
        return None
    _, separator, credential = authorization.partition(" ")
    if not separator:
        return None
    return credential.strip() or None


def resolve_token(
    headers: Mapping[str, str],
    query: Mapping[str, str],
    cookies: Mapping[str, str],
    *,
    allow_query: bool = False,
    cookie_name: str = TOKEN_PARAM,
) -> Optional[ResolvedToken]:
    """
    Pick the effective token from a request's carriers.

    Args:
        headers: Request headers (case-insensitive mapping expected)
        query: Query parameters
        cookies: Request cookies
        allow_query: Consult the ``token`` query parameter
        cookie_name: Name of the token cookie

    Returns:
        ResolvedToken, or None when no carrier holds a token
    """
    header_token = bearer_from_header(headers.get("authorization"))
    if header_token:
        return ResolvedToken(header_token, TokenCarrier.HEADER)

    if allow_query:
        query_token = query.get(TOKEN_PARAM)
        if query_token:
            return ResolvedToken(query_token, TokenCarrier.QUERY)

    cookie_token = cookies.get(cookie_name)
    if cookie_token:
        return ResolvedToken(cookie_token, TokenCarrier.COOKIE)

    return None


def is_guest(headers: Mapping[str, str], query: Mapping[str, str]) -> bool:
    """Whether the request carries the guest marker."""
    return (
        headers.get(GUEST_HEADER, "").lower() == GUEST_VALUE
        or query.get(GUEST_QUERY_PARAM) == "true"
    )


def has_query_token(query: Mapping[str, str]) -> bool:
    return TOKEN_PARAM in query


def resolve_from_request(
    request: Request,
    *,
    allow_query: bool = False,
    cookie_name: str = TOKEN_PARAM,
) -> Optional[ResolvedToken]:
    """``resolve_token`` applied to a Starlette request."""
    return resolve_token(
        request.headers,
        request.query_params,
        request.cookies,
        allow_query=allow_query,
        cookie_name=cookie_name,
    )


def is_guest_request(request: Request) -> bool:
    return is_guest(request.headers, request.query_params)
