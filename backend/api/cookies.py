"""Token cookie helpers shared by the auth and page routes."""

from starlette.responses import Response

from shared.config import Settings


def set_token_cookie(response: Response, token: str, settings: Settings) -> None:
    """Session-only httpOnly token cookie (no max-age)."""
    response.set_cookie(
        settings.token_cookie_name,
        token,
        httponly=True,
        secure=settings.cookie_secure,
        path="/",
        samesite="lax",
    )


def clear_auth_cookies(response: Response, settings: Settings) -> None:
    response.delete_cookie(settings.token_cookie_name, path="/", httponly=True)
    response.delete_cookie(settings.session_cookie_name, path="/")
