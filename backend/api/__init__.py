"""
Services Hub API package.

Provides the FastAPI application: auth endpoints, gated pages and the
elevated story and admin routes.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
