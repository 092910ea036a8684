# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the SignDB API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#
# If the Supabase settings are missing, the app still starts but answers
# every request with a 503 CONFIGURATION_ERROR instead of crashing.
# =============================================================================

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.config import Settings, get_settings
from app.exceptions import (
    ConfigurationError,
    SignDBException,
    signdb_exception_handler,
    validation_exception_handler,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if os.getenv("DEBUG", "").lower() in ("1", "true") else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Load the sign catalog from the store
    - Shutdown: Log only; the store client holds no resources to release
    """
    from core.services.catalog_service import catalog_service

    settings = get_settings()
    logger.info(f"Starting SignDB API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    # A failed load is recorded on the service and reported per request
    await run_in_threadpool(catalog_service.load)

    yield

    logger.info("Shutting down SignDB API")


APP_DESCRIPTION = """
## Traffic Sign Catalog API

Browse and search traffic-sign photographs by their MUTCD classification,
colors and shape. Uploading new signs requires the upload password.

### Modes

| Mode | Endpoints |
|------|-----------|
| **Search** | `GET /api/v1/signs`, `GET /api/v1/signs/{id}` |
| **Upload** | `POST /api/v1/auth/authorize`, `POST /api/v1/signs` |

### Quick Start

```bash
# Search for warning signs
curl "http://localhost:8000/api/v1/signs?sign_type=warn"

# Authorize uploads for this session
curl -c cookies.txt -X POST http://localhost:8000/api/v1/auth/authorize \\
  -H "Content-Type: application/json" -d '{"password": "..."}'

# Upload a sign
curl -b cookies.txt -X POST http://localhost:8000/api/v1/signs \\
  -F "photo=@stop.png" -F "sign_details=Stop" -F "sign_type=Regulatory" \\
  -F "mutcd_name=Stop" -F "mutcd_code=R1-1" -F "legend_color=White" \\
  -F "background_color=Red" -F "sign_shape=Octagon"
```
"""


def _build_app(settings: Settings) -> FastAPI:
    """Build the full API for a valid configuration."""
    from app.auth import routes as auth_routes
    from app.routers import health, signs

    app = FastAPI(
        title="SignDB API",
        description=APP_DESCRIPTION,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Auth",
                "description": "Upload password gate",
            },
            {
                "name": "Signs",
                "description": "Search, view and upload traffic signs",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    # CORS middleware - allows the browser front end to call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(SignDBException, signdb_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )

    # =========================================================================
    # Routers
    # =========================================================================

    # Upload authorization endpoints
    app.include_router(
        auth_routes.router,
        prefix="/api/v1/auth",
        tags=["Auth"]
    )

    # Health check endpoints
    app.include_router(
        health.router,
        prefix="/api/v1",
        tags=["Health"]
    )

    # Sign catalog endpoints
    app.include_router(
        signs.router,
        prefix="/api/v1/signs",
        tags=["Signs"]
    )

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "SignDB API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/api/v1/health",
        }

    return app


def _build_error_app(error: ConfigurationError) -> FastAPI:
    """Build a stand-in app that reports a configuration error on every path."""
    app = FastAPI(title="SignDB API (misconfigured)", docs_url=None, redoc_url=None)

    @app.api_route(
        "/{path:path}",
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
        include_in_schema=False,
    )
    async def configuration_error(path: str):
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    return app


def create_app() -> FastAPI:
    """
    Create the FastAPI application.

    Returns the error app instead of raising when configuration is invalid.
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}. {e.suggestion}")
        return _build_error_app(e)

    if settings.DEBUG:
        logging.getLogger().setLevel(logging.DEBUG)

    return _build_app(settings)


# Create FastAPI application
app = create_app()
