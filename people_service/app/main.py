"""FastAPI application factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI

from people_service.app.exception_handlers import configure_exception_handlers
from people_service.app.lifespan import lifespan
from people_service.app.middleware import configure_middleware
from people_service.app.router import setup_routers
from people_service.core.settings import get_app_settings

if TYPE_CHECKING:
    from people_service.core.dependencies import AppContext
    from people_service.core.settings import AppSettings


def create_app(
    app_settings: AppSettings | None = None,
    *,
    context: AppContext | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        app_settings: Settings override; loaded from the environment if omitted.
        context: Prebuilt store and cache. When given, the lifespan does not
            build (nor close) its own.

    Returns:
        Configured FastAPI application instance.
    """
    settings = app_settings or get_app_settings()

    app = FastAPI(
        title=settings.title,
        version=settings.version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        lifespan=lifespan,
    )
    app.state.context = context

    configure_exception_handlers(app)
    configure_middleware(app, settings)
    setup_routers(app)

    return app


# Application instance for uvicorn
app = create_app()
