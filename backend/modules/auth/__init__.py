"""
Authentication module.

Token issuance/verification, request token resolution and the page gate.

Public API:
- IAuthService: Interface for auth operations
- resolve_token / is_guest: Server-side token source resolution
- evaluate_gate, has_full_access, has_admin_access: Authorization policy
- Auth exceptions: InsufficientPermissionsError, LoginRedirect
"""

from .interfaces import IAuthService
from .resolver import (
    ResolvedToken,
    TokenCarrier,
    bearer_from_header,
    resolve_token,
    is_guest,
)
from .policy import (
    GateDecision,
    GateRequest,
    evaluate_gate,
    has_full_access,
    has_admin_access,
)
from .exceptions import InsufficientPermissionsError, LoginRedirect

__all__ = [
    # Interface
    "IAuthService",
    # Resolver
    "ResolvedToken",
    "TokenCarrier",
    "bearer_from_header",
    "resolve_token",
    "is_guest",
    # Policy
    "GateDecision",
    "GateRequest",
    "evaluate_gate",
    "has_full_access",
    "has_admin_access",
    # Exceptions
    "InsufficientPermissionsError",
    "LoginRedirect",
]
