"""Application configuration and router setup."""

import time

import fastapi
import structlog
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi

from components.core import init_db
from components.core.config import get_settings
from components.core.errors import register_error_handlers
from components.core.log import configure_logging
from restapi.endpoints import (
    account,
    auth,
    checklist,
    dashboard,
    discussions,
    financial,
    health_check,
    manage,
    modules,
    notifications,
    partner,
    profile,
    resources,
)

logger = structlog.get_logger(__name__)

DESCRIPTION = (
    "Marriage preparation API: checklist, learning modules, discussion prompts, "
    "financial planning, partner connection and notifications."
)


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging()

    app = fastapi.FastAPI(
        title=settings.SERVICE_NAME,
        description=DESCRIPTION,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
    )

    # Initialize database
    init_db.init_db(app)
    register_error_handlers(app)

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: fastapi.Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request_handled",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response

    # Include routers
    app.include_router(health_check.router)
    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(financial.router)
    app.include_router(checklist.router)
    app.include_router(modules.router)
    app.include_router(discussions.router)
    app.include_router(resources.router)
    app.include_router(partner.router)
    app.include_router(notifications.router)
    app.include_router(dashboard.router)
    app.include_router(account.router)
    app.include_router(manage.router)

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title=settings.SERVICE_NAME,
            version=settings.API_VERSION,
            description=DESCRIPTION,
            routes=app.routes,
        )
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app
