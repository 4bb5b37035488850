"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from shared.config import get_settings
from shared.exceptions import HubError
from shared.logging_config import configure_logging
from modules.auth.exceptions import LoginRedirect

from .dependencies import get_container
from .middleware.auth import AuthGateMiddleware
from .routes import account, admin, auth, health, pages, story

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings)
    if not settings.jwt_secret:
        logger.warning("JWT secret is empty; every token will be rejected")
    if settings.admin_email and settings.admin_password:
        await get_container().accounts.ensure_admin(
            settings.admin_username, settings.admin_email, settings.admin_password
        )
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


async def login_redirect_handler(request: Request, exc: LoginRedirect) -> RedirectResponse:
    logger.debug(f"Redirecting {request.url.path} to {exc.location}: {exc.message}")
    return RedirectResponse(exc.location, status_code=302)


async def hub_error_handler(request: Request, exc: HubError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Accounts, token sessions and gated services",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Gate first, CORS outermost
    app.add_middleware(AuthGateMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(LoginRedirect, login_redirect_handler)
    app.add_exception_handler(HubError, hub_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(story.router, tags=["story"])
    app.include_router(account.router, tags=["account"])
    app.include_router(admin.router, prefix="/admin", tags=["admin"])
    app.include_router(pages.router, tags=["pages"])

    return app


# Application instance for uvicorn
app = create_app()
