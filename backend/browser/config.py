"""
Client-side configuration.

Tunables for the token lifecycle manager, loaded from ``HUB_CLIENT_*``
environment variables.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for a long-lived client session."""

    model_config = SettingsConfigDict(
        env_prefix="HUB_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = "http://localhost:3000"

    # Timer and windows, in seconds
    refresh_interval_seconds: float = 5 * 60
    activity_window_seconds: float = 30 * 60
    refresh_window_seconds: int = 10 * 60

    login_path: str = "/login"
    refresh_path: str = "/auth/refresh"

    # JSON file backing durable storage; in-memory when unset
    storage_path: Optional[str] = None


@lru_cache
def get_client_settings() -> ClientSettings:
    """Get cached client settings."""
    return ClientSettings()
