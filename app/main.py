# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the image ingestion API.
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
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings, settings
from app.exceptions import (
    ImageHubException,
    imagehub_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)
from app.routers import health, images
from app.routers.health import VERSION

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


DESCRIPTION = """
## Image uploads for communities and businesses

Owners upload a cover image or logo; the file is stored in the bucket for
the entity kind and its public URL is written to the entity row.

### Quick Start

```bash
curl -X POST http://localhost:8000/api/v1/upload-image \\
  -H "x-session-token: <token>" \\
  -F "file=@cover.png" \\
  -F "bucket_type=communities" \\
  -F "entity_id=<community id>" \\
  -F "image_type=cover"
```
"""


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to serve with. Defaults to the cached
            process settings; when given, handlers receive this instance
            instead.
    """
    app_settings = app_settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        Logs the effective configuration on startup. The Supabase client is
        created lazily on first use.
        """
        logger.info(f"Starting image API in {app_settings.ENVIRONMENT} mode")
        logger.info(
            f"Image limits: {app_settings.MAX_IMAGE_SIZE_MB}MB, "
            f"types={app_settings.allowed_image_types_list}"
        )

        yield

        logger.info("Shutting down image API")

    app = FastAPI(
        title="Community Image API",
        description=DESCRIPTION,
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Images",
                "description": "Upload cover images and logos",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )

    if app_settings is not get_settings():
        app.dependency_overrides[get_settings] = lambda: app_settings

    # =========================================================================
    # Middleware
    # =========================================================================

    # CORS is open in every environment: browser clients authenticate with
    # the x-session-token header, never with cookies, so credentials are
    # not allowed and preflights always answer with "*".
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(ImageHubException, imagehub_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    # Image upload endpoints
    app.include_router(
        images.router,
        prefix="/api/v1",
        tags=["Images"]
    )

    # Health check endpoints
    app.include_router(
        health.router,
        prefix="/api/v1",
        tags=["Health"]
    )

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Community Image API",
            "version": VERSION,
            "docs": "/docs",
            "health": "/api/v1/health",
        }

    return app


# Create FastAPI application
app = create_app()
