"""
Authentication request/response models.

Field names follow the JSON the browser client already expects.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Username/password login."""

    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Plain-text password")


class LoginResponse(BaseModel):
    """Login outcome. ``token`` on success, ``message`` on failure."""

    success: bool
    token: Optional[str] = None
    message: Optional[str] = None


class RegisterResponse(BaseModel):
    success: bool
    message: str


class RefreshResponse(BaseModel):
    """A freshly signed token for the same subject."""

    token: str


class VerifyResponse(BaseModel):
    """Account view for a verified token."""

    user: dict[str, Any]


class StatusResponse(BaseModel):
    """Generic success/message body."""

    success: bool
    message: Optional[str] = None
