# remainder_service/main.py
"""
FastAPI application entry point with error envelopes, rate limiting, and CORS.

This module configures and creates the FastAPI application instance with:
- Lifespan management (startup/shutdown handlers)
- Exception handlers that render every failure in one JSON envelope
- CORS middleware for cross-origin requests
- Rate limiting with slowapi
- Router registration for the remainders API
- Health check endpoint
- OpenAPI documentation (Swagger UI and ReDoc)

The application provides an unauthenticated REST API for storing
remainders (reminders) addressed by an owner's email or phone number.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.docs import get_redoc_html
from fastapi.responses import HTMLResponse
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy import text

from remainder_service.core.config import get_settings
from remainder_service.core.errors import register_exception_handlers
from remainder_service.db import get_session_context
from remainder_service.routers import remainders
from remainder_service.schemas import HealthResponse

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    storage_uri=settings.rate_limit_storage_uri,
    enabled=settings.rate_limit_enabled,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler for startup and shutdown events.

    On startup:
    - Logs application info
    - Checks that the record store is reachable

    On shutdown:
    - Logs shutdown message

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application.
    """
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    logger.info("Environment: %s", settings.environment)

    try:
        with get_session_context() as session:
            session.execute(text("SELECT 1"))
        logger.info("Database connection established")
    except Exception as e:
        logger.warning(f"Database not reachable at startup: {e}")

    yield

    logger.info("Shutting down %s", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    description="""
## Remainder Service API

A REST API for storing remainders (reminders) for birthdays, anniversaries,
meetings and appointments.

### Features

- **CRUD Operations**: Create, read, update, and delete remainders
- **Owner Lookup**: List remainders by the owner's email or phone number
- **Pagination**: `page` / `limit` query parameters on listings
- **Upcoming**: Remainders dated from today up to seven days ahead
- **Rate Limiting**: Every route is rate-limited per client IP

### Response Envelope

Successful responses carry `{"success": true, "message": ..., "data": ...}`.
Failures carry `{"success": false, "message": ..., "errors": [...]}` where
`errors` lists one entry per offending field.

### Status Codes

- `201` created, `200` read/update/delete
- `400` validation failure or missing `email`/`phone` on listings
- `404` unknown remainder or route
- `429` rate limit exceeded
- `500` unexpected failure
    """,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url=None,
    openapi_url="/openapi.json",
)

# Add rate limiter state and exception handlers
app.state.limiter = limiter
register_exception_handlers(app)


@app.get("/redoc", include_in_schema=False)
def redoc_html() -> HTMLResponse:
    """
    Custom ReDoc page with stable version.

    Returns:
        HTML response with ReDoc documentation.
    """
    return get_redoc_html(
        openapi_url=app.openapi_url or "/openapi.json",
        title=f"{app.title} - ReDoc",
        redoc_js_url="https://cdn.jsdelivr.net/npm/redoc@2.1.3/bundles/redoc.standalone.js",
    )


# Middleware
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(remainders.router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse, tags=["health"])
@limiter.exempt
def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service status and the current server time for monitoring.

    Returns:
        Liveness envelope with a UTC timestamp.
    """
    return HealthResponse(
        message=f"{settings.app_name} is running!",
        timestamp=datetime.now(UTC),
    )


def run() -> None:
    """Start the API server with uvicorn on the configured host and port."""
    logger.info(
        "Server running in %s mode on port %s", settings.environment, settings.port
    )
    uvicorn.run(
        "remainder_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
