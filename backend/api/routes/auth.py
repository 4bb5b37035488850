"""
Authentication endpoints.

Login, registration, token refresh/verification, logout and profile edits.
Failed logins and registrations answer 200 with ``success: false``; token
failures answer 401/404 through the app's exception handlers.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from shared.config import get_settings
from modules.accounts.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
)
from modules.accounts.models import (
    Account,
    ProfileUpdate,
    RegisterRequest,
    minimal_view,
    public_view,
)
from modules.accounts.service import AccountService
from modules.auth.models import (
    LoginRequest,
    LoginResponse,
    RefreshResponse,
    RegisterResponse,
    StatusResponse,
    VerifyResponse,
)
from modules.auth.policy import LOGIN_PATH
from modules.auth.service import AuthService

from ..cookies import clear_auth_cookies, set_token_cookie
from ..dependencies import get_account_service, get_auth_service
from ..middleware.auth import get_current_account, get_session_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(
    body: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Exchange username/password for a token.

    The token is returned in the body and set as an httpOnly session cookie.
    """
    try:
        _, token = await auth.login(body.username, body.password)
    except InvalidCredentialsError as e:
        return LoginResponse(success=False, message=e.message)

    set_token_cookie(response, token, get_settings())
    return LoginResponse(success=True, token=token)


@router.post("/register", response_model=RegisterResponse)
async def register(
    body: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    """Create a local account with the basic tier."""
    try:
        await accounts.register(body.username, body.email, body.password)
    except (DuplicateUsernameError, DuplicateEmailError) as e:
        return RegisterResponse(success=False, message=e.message)
    return RegisterResponse(success=True, message="Registration successful")


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> RefreshResponse:
    """
    Re-sign the presented token.

    Accepts tokens that expired less than the configured grace window ago.
    """
    new_token = await auth.refresh(token)
    set_token_cookie(response, new_token, get_settings())
    return RefreshResponse(token=new_token)


@router.get("/verify", response_model=VerifyResponse)
async def verify(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> VerifyResponse:
    """Return the account behind a header or cookie token."""
    account = await auth.authenticate_token(token)
    return VerifyResponse(user=public_view(account))


@router.get("/whoami")
async def whoami(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
):
    """Minimal account info, or 204 when there is no usable session."""
    account = await auth.find_account(token)
    if account is None:
        return Response(status_code=204)
    return minimal_view(account)


@router.post("/logout", response_model=StatusResponse)
async def logout(response: Response) -> StatusResponse:
    """Clear the token and session cookies."""
    clear_auth_cookies(response, get_settings())
    return StatusResponse(success=True, message="Logged out successfully")


@router.get("/logout")
async def logout_redirect() -> RedirectResponse:
    """Clear cookies and send the browser to the login page."""
    redirect = RedirectResponse(LOGIN_PATH, status_code=302)
    clear_auth_cookies(redirect, get_settings())
    return redirect


@router.post("/update-profile", response_model=StatusResponse)
async def update_profile(
    body: ProfileUpdate,
    account: Account = Depends(get_current_account),
    accounts: AccountService = Depends(get_account_service),
) -> StatusResponse:
    """Change username, email and/or password of the current account."""
    try:
        await accounts.update_profile(account.id, body)
    except (DuplicateUsernameError, DuplicateEmailError) as e:
        return StatusResponse(success=False, message=e.message)
    return StatusResponse(success=True, message="Profile updated successfully")


class ProfileImageResponse(BaseModel):
    success: bool
    imageUrl: str


@router.post("/upload-profile-image", response_model=ProfileImageResponse)
async def upload_profile_image(
    account: Account = Depends(get_current_account),
    accounts: AccountService = Depends(get_account_service),
) -> ProfileImageResponse:
    """Assign the account's profile image path."""
    image_url = await accounts.set_profile_image(account.id)
    return ProfileImageResponse(success=True, imageUrl=image_url)
