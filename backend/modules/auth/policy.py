"""
Request gate policy and access predicates.

The gate decides, from presence signals alone, whether a page request may
proceed or must go to the login page. Signature and privilege checks happen
later in route dependencies, which answer 401/403/404 themselves.
"""

from dataclasses import dataclass
from enum import Enum

from modules.accounts.models import Account, Role, Subscription

LOGIN_PATH = "/login"
ROOT_PATH = "/"

# Always reachable without a token.
PUBLIC_PREFIXES = ("/login", "/register", "/auth/", "/logout")
PUBLIC_PATHS = ("/auth",)

# JSON endpoints enforce their own status codes instead of redirecting.
API_PREFIXES = ("/api/",)


class GateDecision(str, Enum):
    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"


@dataclass(frozen=True)
class GateRequest:
    """What the gate needs to know about a request."""

    path: str
    method: str
    has_token: bool
    is_guest: bool
    query_token: bool


def is_public_path(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def is_api_request(path: str, method: str) -> bool:
    return method.upper() != "GET" or path.startswith(API_PREFIXES)


def evaluate_gate(request: GateRequest) -> GateDecision:
    """
    Decide whether a request passes the gate.

    Order:
    1. a ``token`` query parameter on ``/`` always redirects, valid or not
    2. public paths pass
    3. API calls pass to their handlers
    4. a token or the guest marker is required
    """
    if request.path == ROOT_PATH and request.query_token:
        return GateDecision.REDIRECT_LOGIN

    if is_public_path(request.path):
        return GateDecision.ALLOW

    if is_api_request(request.path, request.method):
        return GateDecision.ALLOW

    if request.has_token or request.is_guest:
        return GateDecision.ALLOW

    return GateDecision.REDIRECT_LOGIN


def has_full_access(account: Account) -> bool:
    """Full subscribers and admins."""
    return account.subscription is Subscription.FULL or account.role is Role.ADMIN


def has_admin_access(account: Account) -> bool:
    return account.role is Role.ADMIN
