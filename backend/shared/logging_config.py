"""Logging setup for the API process."""

import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings. Safe to call more than once."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def mask_token(token: str | None) -> str:
    """Return a log-safe prefix of a token."""
    if not token:
        return "<none>"
    return f"{token[:12]}..."
