"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grove.config import Settings
from grove.interface.api.errors import register_error_handlers
from grove.interface.api.routes import comments, forests, health, posts
from grove.interface.api.security import install_security_headers
from grove.util.di.container import create_container, setup_di
from grove.util.observability import instrument_fastapi, instrument_httpx


def create_app(
    settings: Settings | None = None, container: AsyncContainer | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py does.

    Args:
        settings: Application settings, loaded from the environment if omitted
        container: DI container, the production container if omitted
    """
    settings = settings or Settings()

    # Instrument httpx for outbound HTTP requests
    instrument_httpx()

    app_instance = FastAPI(
        title="Grove API",
        description="Backend API for Grove - short posts with threaded branch comments",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Authorization", "Content-Type", "Cookie"],
        max_age=86400,  # Cache preflight requests for 24 hours
    )

    # Added last so it wraps every response, errors included
    install_security_headers(app_instance, settings)

    # Setup dependency injection
    container = container or create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance, settings)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(forests.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
