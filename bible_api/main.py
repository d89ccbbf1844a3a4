"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Tests import the module-level `app` and override get_db

2. Lifespan Events
   - startup: build the Database and the CacheClient, store them on app.state
   - shutdown: dispose the engine and close the Redis connection

3. Middleware Stack
   - Rate limiting (slowapi)
   - CORS
   - Request logging with X-Request-ID

4. Exception Handlers
   - ValidationError → 400, NotFoundError → 404
   - StorageError and anything unexpected → 500
   - Every error body uses the {"success": false, ...} envelope
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from bible_api import __version__
from bible_api.config import get_settings
from bible_api.database import Database
from bible_api.exceptions import NotFoundError, StorageError, ValidationError
from bible_api.middleware import RequestLoggingMiddleware
from bible_api.routers import books_router, chapters_router, verses_router
from bible_api.services.cache import CacheClient
from bible_api.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

MOTTO = {
    "latin": "Ego sum via et veritas et vita!",
    "ptBR": "Eu sou o caminho, a verdade e a vida!",
    "enUS": "I am the way, the truth, and the life!",
}


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield runs on startup, code after yield on shutdown.
    The database and cache clients live on app.state for the lifetime of
    the process and are released here, not at interpreter exit.
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name} ({settings.environment})...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"API version: {settings.api_version}")

    app.state.database = Database.from_settings(settings)
    app.state.cache = CacheClient.from_settings(settings)
    if app.state.cache.enabled:
        logger.info("Redis caching enabled")
    else:
        logger.warning("Redis unavailable - caching disabled")

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    app.state.cache.close()
    app.state.database.dispose()


# =============================================================================
# Error Envelopes
# =============================================================================
def _error_response(status_code: int, error: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "code": code},
    )


def _internal_error_response(detail: str) -> JSONResponse:
    content = {"success": False, "message": "Error fetching data"}
    if settings.debug:
        content["error"] = detail
    return JSONResponse(status_code=500, content=content)


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Bible API

A read-only REST API over the 73-book Catholic canon.

### Resources
- **Books**: paginated, filterable by testament, addressed by canonical position (1-73)
- **Chapters**: paginated per book
- **Verses**: paginated per chapter

### Conventions
- Every response is wrapped in `{"success": ..., "data": ...}`
- Listings carry `pagination` metadata in camelCase
- Errors carry a machine-readable `code`

### Rate Limiting
Public routes are limited per client IP.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    # Attach the limiter to the app state so it can be accessed by decorators
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Cache"],
    )

    # -------------------------------------------------------------------------
    # Request Logging
    # -------------------------------------------------------------------------
    # Added last so it wraps every other middleware
    app.add_middleware(RequestLoggingMiddleware, exempt_paths={"/health"})

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """Rejected input → 400 with the validation kind as code."""
        return _error_response(400, exc.message, exc.code)

    @app.exception_handler(NotFoundError)
    async def not_found_exception_handler(
        request: Request,
        exc: NotFoundError,
    ) -> JSONResponse:
        """Missing book, chapter or verse → 404."""
        return _error_response(404, exc.message, exc.code)

    @app.exception_handler(StorageError)
    async def storage_exception_handler(
        request: Request,
        exc: StorageError,
    ) -> JSONResponse:
        """
        Data-access failures → 500.

        The repository already logged the driver error; the client only
        sees the detail in debug mode.
        """
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc.message}")
        return _internal_error_response(exc.message)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Catch-all exception handler."""
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        return _internal_error_response(str(exc))

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    # prefix="/api/v1" creates versioned URLs: /api/v1/public/bible/books
    api_prefix = f"/api/{settings.api_version}"

    app.include_router(books_router, prefix=api_prefix)
    app.include_router(chapters_router, prefix=api_prefix)
    app.include_router(verses_router, prefix=api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    def health_check(request: Request) -> dict:
        """
        Health check endpoint.

        Used by load balancers and container health checks. Reports cache
        connectivity and the rate limiting configuration.
        """
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": __version__,
            "environment": settings.environment,
            "cache": request.app.state.cache.stats(),
            "rate_limiting": {
                "enabled": settings.rate_limit_enabled,
                "public_limit": settings.rate_limit_public,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    def root() -> dict:
        """Root endpoint: John 14:6 plus pointers to the docs."""
        return {
            **MOTTO,
            "message": f"Welcome to {settings.app_name}",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "books": f"/api/{settings.api_version}/public/bible/books",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bible_api.main:app
app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bible_api.main
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bible_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
