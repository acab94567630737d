"""
Brewhouse API package.

Provides the FastAPI application serving the storefront's auth flow and
role-gated pages.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
