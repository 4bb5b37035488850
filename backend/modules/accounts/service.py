"""
Account service implementation.

Registration, credential checks, OAuth linking, profile edits and the
subscription/credit mutations. Password hashing runs in a worker thread so
the event loop keeps serving other requests meanwhile.
"""

import asyncio
import logging
from typing import Optional

import bcrypt

from .exceptions import (
    AccountNotFoundError,
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidPackageError,
    InvalidPlanError,
)
from .interfaces import IAccountService, IAccountStore
from .models import (
    ADMIN_LOGIN_AI_CREDITS,
    CREDIT_PACKAGES,
    FULL_UPGRADE_BONUS_CREDITS,
    Account,
    OAuthProfile,
    OAuthProvider,
    ProfileUpdate,
    Role,
    Subscription,
)
from .store import InMemoryAccountStore

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


def _hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def _check_password(password: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        return False


async def hash_password(password: str) -> str:
    """Hash a password off the event loop."""
    return await asyncio.to_thread(_hash_password, password)


async def check_password(password: str, hashed: Optional[str]) -> bool:
    """Compare a password with a stored hash off the event loop."""
    return await asyncio.to_thread(_check_password, password, hashed)


class AccountService(IAccountService):
    """
    Implementation of the account service.

    Backed by an IAccountStore; defaults to a fresh in-memory store.
    """

    def __init__(self, store: Optional[IAccountStore] = None):
        self._store = store if store is not None else InMemoryAccountStore()

    @property
    def store(self) -> IAccountStore:
        return self._store

    async def register(self, username: str, email: str, password: str) -> Account:
        """
        Create a local account with role ``user`` and the basic tier.

        Raises:
            DuplicateUsernameError: If the username is taken
            DuplicateEmailError: If the email is taken
        """
        if self._store.find_by_username(username):
            raise DuplicateUsernameError(username)
        if self._store.find_by_email(email):
            raise DuplicateEmailError(email)

        password_hash = await hash_password(password)

        # Another request may have registered the same name during the await.
        if self._store.find_by_username(username):
            raise DuplicateUsernameError(username)
        if self._store.find_by_email(email):
            raise DuplicateEmailError(email)

        account = Account(
            id=self._store.next_id(),
            username=username,
            email=email,
            password_hash=password_hash,
        )
        self._store.add(account)
        logger.info(f"Registered account {account.id} ({username})")
        return account

    async def authenticate(self, username: str, password: str) -> Account:
        """
        Check a username/password pair.

        Admins get their AI credits reset on every successful login.

        Raises:
            InvalidCredentialsError: Unknown user or wrong password
        """
        account = self._store.find_by_username(username)
        if account is None:
            logger.info(f"Login failed, unknown user: {username}")
            raise InvalidCredentialsError()

        if not await check_password(password, account.password_hash):
            logger.info(f"Login failed, password mismatch: {username}")
            raise InvalidCredentialsError()

        self._on_login(account)
        return account

    async def get_account(self, account_id: int) -> Account:
        """
        Raises:
            AccountNotFoundError: If no account has this ID
        """
        account = self._store.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def link_oauth(self, profile: OAuthProfile) -> Account:
        """
        Resolve the account for an external login.

        Looks up by provider ID, then merges into an existing account with the
        same email, and finally creates a new basic account.
        """
        account = self._store.find_by_provider(profile.provider, profile.provider_id)

        if account is None and profile.email:
            account = self._store.find_by_email(profile.email)
            if account is not None:
                self._attach_provider(account, profile)
                logger.info(
                    f"Merged {profile.provider.value} login into account {account.id}"
                )

        if account is None:
            account = Account(
                id=self._store.next_id(),
                username=self._free_username(profile),
                email=profile.fallback_email(),
            )
            self._attach_provider(account, profile)
            self._store.add(account)
            logger.info(
                f"Created {profile.provider.value} account {account.id} ({account.email})"
            )

        self._on_login(account)
        return account

    async def update_profile(self, account_id: int, update: ProfileUpdate) -> Account:
        """
        Apply profile changes.

        Username and email are each checked for uniqueness independently;
        a failing check leaves earlier changes in this call applied.
        """
        account = await self.get_account(account_id)

        if update.username and update.username != account.username:
            other = self._store.find_by_username(update.username)
            if other is not None and other.id != account.id:
                raise DuplicateUsernameError(update.username)
            account.username = update.username

        if update.email and update.email != account.email:
            other = self._store.find_by_email(update.email)
            if other is not None and other.id != account.id:
                raise DuplicateEmailError(update.email)
            account.email = update.email

        if update.password:
            account.password_hash = await hash_password(update.password)

        return account

    async def set_profile_image(self, account_id: int) -> str:
        account = await self.get_account(account_id)
        account.profile_image = f"/images/profile-{account.id}.jpg"
        return account.profile_image

    async def delete_by_email(self, email: str) -> bool:
        deleted = self._store.remove_by_email(email)
        if deleted:
            logger.info(f"Account data deleted for {email}")
        return deleted

    async def upgrade_subscription(self, account_id: int, plan: str) -> Account:
        """
        Move an account to a paid tier. ``full`` adds bonus AI credits.

        Raises:
            InvalidPlanError: plan is not premium or full
        """
        if plan not in (Subscription.PREMIUM.value, Subscription.FULL.value):
            raise InvalidPlanError(plan)

        account = await self.get_account(account_id)
        account.subscription = Subscription(plan)
        if account.subscription is Subscription.FULL:
            account.ai_credits += FULL_UPGRADE_BONUS_CREDITS
        logger.info(
            f"Account {account.id} upgraded to {plan}, AI credits: {account.ai_credits}"
        )
        return account

    async def purchase_credits(self, account_id: int, credits: int, price: float) -> Account:
        """
        Raises:
            InvalidPackageError: credits/price do not match a known package
        """
        if not any(p.credits == credits and p.price == price for p in CREDIT_PACKAGES):
            raise InvalidPackageError(credits, price)

        account = await self.get_account(account_id)
        account.ai_credits += credits
        return account

    async def ensure_admin(self, username: str, email: str, password: str) -> Account:
        """Create the admin account once; later calls return the existing one."""
        existing = self._store.find_admin()
        if existing is not None:
            return existing

        account = Account(
            id=self._store.next_id(),
            username=username,
            email=email,
            password_hash=await hash_password(password),
            role=Role.ADMIN,
            subscription=Subscription.FULL,
        )
        self._store.add(account)
        logger.info(f"Admin account {account.id} created")
        return account

    def _free_username(self, profile: OAuthProfile) -> str:
        """Display name if unused, else suffixed with the provider ID and a counter."""
        name = profile.display_name
        if self._store.find_by_username(name) is None:
            return name

        base = f"{name}-{profile.provider_id}"
        candidate = base
        suffix = 1
        while self._store.find_by_username(candidate) is not None:
            suffix += 1
            candidate = f"{base}-{suffix}"
        logger.info(f"Username {name!r} taken, using {candidate!r}")
        return candidate

    @staticmethod
    def _attach_provider(account: Account, profile: OAuthProfile) -> None:
        if profile.provider is OAuthProvider.GOOGLE:
            account.google_id = profile.provider_id
            account.google_photo = profile.photo_url
        else:
            account.facebook_id = profile.provider_id
            account.facebook_photo = profile.photo_url

    @staticmethod
    def _on_login(account: Account) -> None:
        if account.role is Role.ADMIN:
            account.ai_credits = ADMIN_LOGIN_AI_CREDITS
            logger.info(f"Admin {account.id} AI credits reset to {ADMIN_LOGIN_AI_CREDITS}")
