"""FastAPI application."""

from typing import Optional

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from querynet.config import Settings
from querynet.interface.api.routes import (
    answers,
    auth,
    health,
    notifications,
    questions,
    stats,
    users,
)
from querynet.interface.error import register_exception_handlers
from querynet.util.di.container import create_container, setup_di
from querynet.util.error import ConfigurationError
from querynet.util.logging import setup_logging
from querynet.util.observability import instrument_fastapi

DEFAULT_JWT_SECRET = "CHANGE_ME_IN_PRODUCTION"


def create_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to mount; the production container when omitted

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    settings = Settings()
    if settings.environment == "production" and settings.auth.jwt_secret == DEFAULT_JWT_SECRET:
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")

    setup_logging(settings)

    app_instance = FastAPI(
        title="QueryNet API",
        description="Backend API for QueryNet - a community question and answer site",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())
    register_exception_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(questions.router)
    app_instance.include_router(answers.router)
    app_instance.include_router(notifications.router)
    app_instance.include_router(users.router)
    app_instance.include_router(stats.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
