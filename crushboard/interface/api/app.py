"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crushboard.config import AuthSettings, Settings
from crushboard.interface.api.routes import (
    auth,
    health,
    live,
    posts,
    profile,
    replies,
    votes,
)
from crushboard.util.di.container import create_container, setup_di
from crushboard.util.error import ConfigurationError
from crushboard.util.observability import instrument_fastapi

DEFAULT_JWT_SECRET = AuthSettings.model_fields["jwt_secret"].default


def create_app(settings: Settings | None = None, container=None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        container: DI container (production container if omitted)

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    settings = settings or Settings()

    if settings.environment == "production" and (
        settings.auth.jwt_secret == DEFAULT_JWT_SECRET
    ):
        raise ConfigurationError(
            "AUTH__JWT_SECRET", "the default secret is not allowed in production"
        )

    app_instance = FastAPI(
        title="CrushBoard API",
        description="Backend API for CrushBoard - an anonymous campus confession board",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP and WebSocket requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
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

    # Setup dependency injection
    setup_di(app_instance, container or create_container(settings))

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(profile.router)
    app_instance.include_router(live.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(replies.router)

    return app_instance
