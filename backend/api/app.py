"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from shared.config import get_settings as get_shared_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BrewhouseError,
    ConfigurationError,
    ExternalServiceError,
    ValidationError,
)

from .config import get_settings
from .routes import auth, health, pages, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting Brewhouse API on %s:%s", settings.host, settings.port)
    if not get_shared_settings().app_url:
        logger.warning("APP_URL is not set; sign-in links cannot be built")
    yield
    # Shutdown
    logger.info("Shutting down Brewhouse API")


def _status_for(exc: BrewhouseError) -> int:
    if isinstance(exc, ValidationError):
        return 422
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, ConfigurationError):
        return 500
    if isinstance(exc, ExternalServiceError):
        return 502
    return 400


async def brewhouse_error_handler(request: Request, exc: BrewhouseError) -> JSONResponse:
    """Turn domain errors into the standard error response."""
    status_code = _status_for(exc)
    body = exc.to_dict()

    if isinstance(exc, ValidationError):
        body["fields"] = exc.details.get("fields", {})
    # Upstream reasons are logged, not sent to the browser
    body["details"] = {k: v for k, v in exc.details.items() if k != "reason"}

    if status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc, exc.details.get("reason", ""))
    else:
        logger.info(
            "%s %s rejected: %s (%s)",
            request.method, request.url.path, exc.code, exc.details.get("reason", ""),
        )
    return JSONResponse(status_code=status_code, content=body)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    shared = get_shared_settings()

    app = FastAPI(
        title="Brewhouse API",
        description="Storefront authentication, onboarding and role routing",
        version=shared.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Signed cookie carrying the browser id; the slots themselves stay server-side
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.session_https_only,
    )

    app.add_exception_handler(BrewhouseError, brewhouse_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(pages.router, tags=["pages"])

    return app


# Application instance for uvicorn
app = create_app()
