# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Places API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    PlacesException,
    http_exception_handler,
    places_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import health, places, users
from core.services import ServiceContext

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(context: ServiceContext | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        context: Pre-built service context (tests pass one with fakes).
            When omitted, one is built from settings at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        - Startup: build/start the service context (tables, upload dir)
        - Shutdown: close the geocoder client and dispose the engine
        """
        logger.info(f"Starting Places API in {settings.ENVIRONMENT} mode")
        service_context = context or ServiceContext.from_settings(settings)
        service_context.startup()
        app.state.context = service_context

        yield

        logger.info("Shutting down Places API")
        service_context.shutdown()

    app = FastAPI(
        title="Places API",
        description="""
## Places API

Users sign up with an avatar image, log in, and manage places: geocoded
addresses with a title, a description and a photo.

- Reading places and users is public
- Creating, editing and deleting places requires `Authorization: Bearer <token>`
- Only a place's creator may edit or delete it
""",
        version=health.API_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Users", "description": "Sign-up, log-in and user listing"},
            {"name": "Places", "description": "Create, read, update and delete places"},
            {"name": "Health", "description": "Keep-alive and health checks"},
        ],
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(PlacesException, places_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(places.router, prefix="/api/places", tags=["Places"])

    # Uploaded images are served read-only
    upload_dir = context.images.upload_dir if context else settings.UPLOAD_DIR
    app.mount("/uploads/images", StaticFiles(directory=upload_dir, check_dir=False), name="images")

    return app


app = create_app()
