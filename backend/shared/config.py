"""
Centralized configuration for the Services Hub backend.

All settings are loaded from environment variables with sensible defaults.
Token and cookie policy lives here so the auth module and the API layer
read the same values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Services Hub"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Token policy
    jwt_secret: str = "dev-secret-change-me"
    token_ttl_seconds: int = 3600
    refresh_grace_seconds: int = 24 * 60 * 60  # how long after expiry a token may still be refreshed
    accept_query_token: bool = True  # legacy API fallback; never honored at "/"

    # Cookies
    token_cookie_name: str = "token"
    session_cookie_name: str = "session"
    cookie_secure: bool = False

    # Contacts and the admin seeded at startup (skipped without a password)
    admin_email: str = ""
    admin_username: str = "admin"
    admin_password: str = ""


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
