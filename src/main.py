import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from config.logging import setup_logging
from config.settings import get_settings
from database import init_database
from exceptions.handlers import register_exception_handlers
from pipeline.responses import ResponseEnvelope
from routers import (
    accounts,
    announcements,
    cinemas,
    halls,
    lookups,
    movies,
    purchases,
    showtimes,
    users
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_database()
    logger.info("Cinema Management API started")
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application with OpenAPI documentation.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Cinema Management API",
        description="""
        # Cinema Management API Documentation

        ## Overview
        This API manages a cinema chain: cinemas and their halls, the movie
        catalogue with its reference data, showtimes, announcements, users
        and ticket purchases.

        ## Conventions
        - Every response is an envelope `{success, message, data}`.
        - List endpoints accept `select`, `sort`, `limit`, `page` and `paging`.
        - Nested routes such as `/cinemas/{cinema_id}/halls/` scope a list
          to the parent record.

        ## Authentication
        Log in at `/api/v1/auth/login/` and send the token as
        `Authorization: Bearer <token>`. Writes on catalogue data require the
        admin role.

        ## Versioning
        All endpoints are prefixed with `/api/v1/`.
        """,
        version=API_VERSION,
        lifespan=lifespan
    )

    register_exception_handlers(app)

    api_version_index = "/api/v1"

    app.include_router(
        accounts.router,
        prefix=f"{api_version_index}/auth",
        tags=["auth"]
    )
    app.include_router(lookups.router, prefix=api_version_index)
    app.include_router(
        cinemas.router,
        prefix=api_version_index,
        tags=["cinemas"]
    )
    app.include_router(
        halls.router,
        prefix=api_version_index,
        tags=["halls"]
    )
    app.include_router(
        movies.router,
        prefix=api_version_index,
        tags=["movies"]
    )
    app.include_router(
        showtimes.router,
        prefix=api_version_index,
        tags=["showtimes"]
    )
    app.include_router(
        announcements.router,
        prefix=api_version_index,
        tags=["announcements"]
    )
    app.include_router(
        users.router,
        prefix=api_version_index,
        tags=["users"]
    )
    app.include_router(
        purchases.router,
        prefix=api_version_index,
        tags=["purchases"]
    )

    @app.get(
        "/health",
        response_model=ResponseEnvelope[dict],
        tags=["system"],
        summary="Health Check",
        description="Check if the API is running and healthy",
        response_description="API health status"
    )
    async def health_check() -> ResponseEnvelope[dict]:
        """Check API health status.

        Returns:
            ResponseEnvelope[dict]: Health status information
        """
        return ResponseEnvelope.ok({
            "status": "healthy",
            "version": API_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat()
        })

    def custom_openapi():
        """Generate the OpenAPI schema with the bearer security scheme.

        Returns:
            dict: Custom OpenAPI schema
        """
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "JWT token obtained from login endpoint"
            }
        }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app


app = create_app()
