"""
Accounts module.

In-memory user records and the operations that mutate them.

Public API:
- IAccountStore, IAccountService: Interfaces
- Account, Role, Subscription, OAuthProfile, ProfileUpdate: Models
- Account exceptions: AccountNotFoundError, DuplicateUsernameError, etc.
"""

from .interfaces import IAccountStore, IAccountService
from .models import (
    Account,
    Role,
    Subscription,
    OAuthProvider,
    OAuthProfile,
    ProfileUpdate,
    RegisterRequest,
    UpgradeRequest,
    PurchaseRequest,
    EmailRequest,
    CreditPackage,
    CREDIT_PACKAGES,
)
from .exceptions import (
    AccountNotFoundError,
    InvalidCredentialsError,
    DuplicateUsernameError,
    DuplicateEmailError,
    InvalidPlanError,
    InvalidPackageError,
)

__all__ = [
    # Interfaces
    "IAccountStore",
    "IAccountService",
    # Models
    "Account",
    "Role",
    "Subscription",
    "OAuthProvider",
    "OAuthProfile",
    "ProfileUpdate",
    "RegisterRequest",
    "UpgradeRequest",
    "PurchaseRequest",
    "EmailRequest",
    "CreditPackage",
    "CREDIT_PACKAGES",
    # Exceptions
    "AccountNotFoundError",
    "InvalidCredentialsError",
    "DuplicateUsernameError",
    "DuplicateEmailError",
    "InvalidPlanError",
    "InvalidPackageError",
]
