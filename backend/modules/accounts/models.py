"""
Account module data models.

Accounts live only in process memory. ``Account`` is mutable because profile
updates, subscription upgrades and credit purchases change it in place.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field


class Role(str, Enum):
    """Account role."""

    USER = "user"
    ADMIN = "admin"


class Subscription(str, Enum):
    """Subscription tier."""

    BASIC = "basic"
    PREMIUM = "premium"
    FULL = "full"


class OAuthProvider(str, Enum):
    """Supported external identity providers."""

    GOOGLE = "google"
    FACEBOOK = "facebook"


DEFAULT_AI_CREDITS = 100
ADMIN_LOGIN_AI_CREDITS = 1000
FULL_UPGRADE_BONUS_CREDITS = 30


class Account(BaseModel):
    """A registered user."""

    id: int = Field(..., description="Stable account ID")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="Unique email address")
    password_hash: Optional[str] = Field(None, description="bcrypt hash; absent for OAuth-only accounts")
    role: Role = Field(default=Role.USER)
    subscription: Subscription = Field(default=Subscription.BASIC)

    google_id: Optional[str] = None
    facebook_id: Optional[str] = None
    google_photo: Optional[str] = None
    facebook_photo: Optional[str] = None
    profile_image: Optional[str] = None

    api_key: Optional[str] = Field(None, description="Per-user AI API credential")
    ai_credits: int = Field(default=DEFAULT_AI_CREDITS)

    @property
    def hide_ads(self) -> bool:
        """Paid tiers do not see ads."""
        return self.subscription in (Subscription.PREMIUM, Subscription.FULL)

    def provider_id(self, provider: OAuthProvider) -> Optional[str]:
        if provider is OAuthProvider.GOOGLE:
            return self.google_id
        return self.facebook_id


class RegisterRequest(BaseModel):
    """Local registration payload."""

    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Profile changes; every field is optional and checked on its own."""

    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class OAuthProfile(BaseModel):
    """Identity returned by an external provider after login."""

    provider: OAuthProvider
    provider_id: str
    display_name: str
    email: Optional[str] = None
    photo_url: Optional[str] = None

    def fallback_email(self) -> str:
        return self.email or f"{self.provider_id}@{self.provider.value}.local"


class CreditPackage(BaseModel):
    """A purchasable bundle of AI credits."""

    credits: int
    price: float


CREDIT_PACKAGES: tuple[CreditPackage, ...] = (
    CreditPackage(credits=10, price=2.00),
    CreditPackage(credits=30, price=4.50),
    CreditPackage(credits=50, price=7.00),
)


class UpgradeRequest(BaseModel):
    plan: str


class PurchaseRequest(BaseModel):
    credits: int
    price: float


class EmailRequest(BaseModel):
    """Body carrying a single address; the route decides whether it is required."""

    email: Optional[str] = None


def public_view(account: Account) -> dict[str, Any]:
    """Fields returned by /auth/verify."""
    return {
        "id": account.id,
        "username": account.username,
        "email": account.email,
        "role": account.role.value,
        "subscription": account.subscription.value,
        "hideAds": account.hide_ads,
        "googlePhoto": account.google_photo,
        "facebookPhoto": account.facebook_photo,
        "profileImage": account.profile_image,
        "apiKey": account.api_key,
        "aiCredits": account.ai_credits,
    }


def minimal_view(account: Account) -> dict[str, Any]:
    """Fields returned by /auth/whoami."""
    return {
        "id": account.id,
        "username": account.username,
        "role": account.role.value,
        "subscription": account.subscription.value,
        "googlePhoto": account.google_photo,
        "facebookPhoto": account.facebook_photo,
    }
