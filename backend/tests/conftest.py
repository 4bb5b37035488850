"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import base64
import json
from typing import Any, Callable, Optional

import pytest
from fastapi.testclient import TestClient

from api import app
from api.dependencies import get_container, reset_container
from modules.accounts.models import Account, Role, Subscription
from modules.accounts.store import InMemoryAccountStore
from modules.tokens import codec
from shared.config import get_settings


def create_test_token(
    account_id: int = 1,
    ttl_seconds: int = 3600,
    now: Optional[float] = None,
    secret: Optional[str] = None,
) -> str:
    """
    Create a signed token with the app's secret.

    Args:
        account_id: Value of the ``id`` claim
        ttl_seconds: Lifetime; negative values give an already expired token
        now: Issue time override (Unix seconds)
        secret: Signing secret; defaults to the configured one
    """
    return codec.sign(account_id, ttl_seconds, secret or get_settings().jwt_secret, now=now)


def encode_segment(data: Any) -> str:
    """Unpadded URL-safe base64 of a JSON value."""
    raw = json.dumps(data).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def make_unsigned_token(payload: dict[str, Any], header: Optional[dict[str, Any]] = None) -> str:
    """Three-segment token with a fake signature, for client-side checks."""
    header = header or {"alg": "HS256", "typ": "JWT"}
    return f"{encode_segment(header)}.{encode_segment(payload)}.signature"


@pytest.fixture(autouse=True)
def reset_services():
    """Give every test an empty account store."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def store() -> InMemoryAccountStore:
    """The store behind the app's account service."""
    return get_container().account_store


@pytest.fixture
def add_account(store) -> Callable[..., Account]:
    """Factory that inserts an account directly into the app's store."""

    def _add(
        username: str = "alice",
        role: Role = Role.USER,
        subscription: Subscription = Subscription.BASIC,
        **fields: Any,
    ) -> Account:
        account = Account(
            id=store.next_id(),
            username=username,
            email=fields.pop("email", f"{username}@example.com"),
            role=role,
            subscription=subscription,
            **fields,
        )
        store.add(account)
        return account

    return _add


@pytest.fixture
def client() -> TestClient:
    """Fresh client per test so cookies never leak between tests."""
    return TestClient(app)


@pytest.fixture
def auth_headers() -> Callable[[Account], dict[str, str]]:
    """Build Authorization headers carrying a valid token for an account."""

    def _headers(account: Account) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_test_token(account.id)}"}

    return _headers


@pytest.fixture
def make_token() -> Callable[..., str]:
    """``create_test_token`` as a fixture."""
    return create_test_token


@pytest.fixture
def unsigned_token() -> Callable[..., str]:
    """``make_unsigned_token`` as a fixture."""
    return make_unsigned_token
