"""
HTML page routes.

Pages are placeholders; the real markup is served by the frontend. What
matters here is who may see them. The gate middleware handles presence and
the page dependencies verify a presented token. Guests are only let onto the
home and math pages. The story generator requires full access.
"""

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from shared.config import get_settings
from modules.accounts.models import Account
from modules.auth.policy import LOGIN_PATH

from ..cookies import clear_auth_cookies
from ..middleware.auth import (
    PageSession,
    allow_guest_page_session,
    require_full_access,
    require_page_session,
)

router = APIRouter()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _render(title: str, body: str) -> str:
    app_name = get_settings().app_name
    return (
        "<!DOCTYPE html>\n"
        f"<html><head><title>{title} - {app_name}</title></head>\n"
        f"<body><h1>{title}</h1>{body}</body></html>\n"
    )


@router.get("/", response_class=HTMLResponse)
async def home(session: PageSession = Depends(allow_guest_page_session)) -> HTMLResponse:
    greeting = "Browsing as guest." if session.is_guest else "Welcome back."
    return HTMLResponse(_render("Services Hub", f"<p>{greeting}</p>"))


@router.get("/login", response_class=HTMLResponse)
async def login_page() -> HTMLResponse:
    """
    Login form.

    Landing here ends any session: token and session cookies are cleared and
    the page is never cached, so the browser cannot show a stale signed-in
    view.
    """
    response = HTMLResponse(
        _render("Login", '<form method="post" action="/auth/login"></form>'),
        headers=NO_CACHE_HEADERS,
    )
    clear_auth_cookies(response, get_settings())
    return response


@router.get("/register", response_class=HTMLResponse)
async def register_page() -> HTMLResponse:
    return HTMLResponse(
        _render("Register", '<form method="post" action="/auth/register"></form>')
    )


@router.get("/math", response_class=HTMLResponse)
async def math_page(session: PageSession = Depends(allow_guest_page_session)) -> HTMLResponse:
    return HTMLResponse(_render("Math Evaluator", ""))


@router.get("/fft-visualizer", response_class=HTMLResponse)
async def fft_page(session: PageSession = Depends(require_page_session)) -> HTMLResponse:
    return HTMLResponse(_render("FFT Visualizer", ""))


@router.get("/profile", response_class=HTMLResponse)
async def profile_page(session: PageSession = Depends(require_page_session)) -> HTMLResponse:
    return HTMLResponse(_render("Profile", ""))


@router.get("/subscription", response_class=HTMLResponse)
async def subscription_page(
    session: PageSession = Depends(require_page_session),
) -> HTMLResponse:
    return HTMLResponse(_render("Subscription", ""))


@router.get("/story-generator", response_class=HTMLResponse)
async def story_generator_page(
    account: Account = Depends(require_full_access),
) -> HTMLResponse:
    return HTMLResponse(
        _render("Story Generator", f"<p>Signed in as {escape(account.username)}.</p>")
    )


@router.get("/logout")
async def logout_page() -> RedirectResponse:
    """Clear cookies and go to the login page."""
    redirect = RedirectResponse(LOGIN_PATH, status_code=302)
    clear_auth_cookies(redirect, get_settings())
    return redirect
