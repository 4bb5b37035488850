"""
Authorization middleware and dependencies.

Two layers:

- ``AuthGateMiddleware`` runs on every request and redirects page requests
  that carry neither a token nor the guest marker to the login page. It
  also refuses tokens passed in the query string of ``/``.
- Route dependencies verify the token, load the account and apply the
  role/subscription predicates, raising 401/404/403 errors.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import RedirectResponse, Response

from shared.config import get_settings
from modules.accounts.models import Account
from modules.auth.exceptions import LoginRedirect
from modules.auth.policy import LOGIN_PATH, GateDecision, GateRequest, evaluate_gate
from modules.auth.resolver import (
    TokenCarrier,
    has_query_token,
    is_guest_request,
    resolve_from_request,
)
from modules.auth.service import AuthService
from modules.tokens.exceptions import MissingTokenError
from shared.exceptions import AuthenticationError

from ..dependencies import get_auth_service

logger = logging.getLogger(__name__)


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Presence-only gate in front of every route."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        settings = get_settings()
        resolved = resolve_from_request(request, cookie_name=settings.token_cookie_name)
        decision = evaluate_gate(
            GateRequest(
                path=request.url.path,
                method=request.method,
                has_token=resolved is not None,
                is_guest=is_guest_request(request),
                query_token=has_query_token(request.query_params),
            )
        )
        if decision is GateDecision.REDIRECT_LOGIN:
            logger.debug(f"Gate redirect to login for {request.method} {request.url.path}")
            return RedirectResponse(LOGIN_PATH, status_code=302)
        return await call_next(request)


def get_request_token(request: Request) -> str:
    """
    Dependency resolving the token for API endpoints.

    Header first, then the ``token`` query parameter when enabled, then the
    cookie.

    Raises:
        MissingTokenError: No carrier holds a token
    """
    settings = get_settings()
    resolved = resolve_from_request(
        request,
        allow_query=settings.accept_query_token,
        cookie_name=settings.token_cookie_name,
    )
    if resolved is None:
        raise MissingTokenError()
    return resolved.value


def get_session_token(request: Request) -> Optional[str]:
    """Header or cookie token, never the query string. None when absent."""
    resolved = resolve_from_request(request, cookie_name=get_settings().token_cookie_name)
    return resolved.value if resolved else None


async def get_current_account(
    token: str = Depends(get_request_token),
    auth: AuthService = Depends(get_auth_service),
) -> Account:
    """
    Dependency that requires a valid token for an existing account.

    Usage:
        @router.post("/protected")
        async def protected(account: Account = Depends(get_current_account)):
            return {"id": account.id}
    """
    return await auth.authenticate_token(token)


async def require_full_access(
    account: Account = Depends(get_current_account),
) -> Account:
    """Full subscription or admin role, else 403."""
    return AuthService.require_full_access(account)


async def require_admin(
    account: Account = Depends(get_current_account),
) -> Account:
    """Admin role, else 403."""
    return AuthService.require_admin(account)


@dataclass(frozen=True)
class PageSession:
    """Who is viewing a page."""

    is_guest: bool
    carrier: Optional[TokenCarrier] = None


def _page_session(request: Request, auth: AuthService, allow_guest: bool) -> PageSession:
    """
    Resolve the viewer of an HTML page.

    A header or cookie token that is present must verify; a query token on
    the page is ignored. Without a token the guest marker is accepted only
    when ``allow_guest`` is set.

    Raises:
        LoginRedirect: Invalid token, or no token and no accepted guest marker
    """
    resolved = resolve_from_request(request, cookie_name=get_settings().token_cookie_name)
    if resolved is not None:
        try:
            auth.verify_token(resolved.value)
        except AuthenticationError:
            raise LoginRedirect(LOGIN_PATH, reason="Invalid token")
        return PageSession(is_guest=False, carrier=resolved.carrier)

    if allow_guest and is_guest_request(request):
        return PageSession(is_guest=True)

    if is_guest_request(request):
        logger.debug(f"Guest refused on {request.url.path}")
    raise LoginRedirect(LOGIN_PATH)


async def require_page_session(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> PageSession:
    """Dependency for pages that need a signed-in viewer."""
    return _page_session(request, auth, allow_guest=False)


async def allow_guest_page_session(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> PageSession:
    """Dependency for the pages guests may browse (home and math)."""
    return _page_session(request, auth, allow_guest=True)


# Type aliases for cleaner route definitions
RequireAccount = Depends(get_current_account)
RequireFullAccess = Depends(require_full_access)
RequireAdmin = Depends(require_admin)
RequirePageSession = Depends(require_page_session)
AllowGuestPageSession = Depends(allow_guest_page_session)
