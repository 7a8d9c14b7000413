# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ChatClassroom HTTP application.

create_app() builds a FastAPI instance around one Settings object. The
lifespan opens the database, notification dispatcher and blob store and
parks them on ``app.state`` where request dependencies pick them up.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded

from src.api.middleware import (
    RequestContextMiddleware,
    create_limiter,
    enforce_rate_limit,
    rate_limit_exceeded_handler,
)
from src.api.routes import health
from src.api.v1 import router as v1_router
from src.core.config import Settings, get_settings
from src.domains.errors import DomainError
from src.infrastructure.database import Database, DatabaseError
from src.infrastructure.notifications import NotificationDispatcher, create_channel
from src.infrastructure.storage import LocalBlobStore
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)

# HTTP status for each domain error kind
ERROR_STATUS = {
    "validation_error": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "not_found": status.HTTP_404_NOT_FOUND,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "conflict": status.HTTP_409_CONFLICT,
    "internal_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open shared resources on startup; drain notifications and close them on shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting ChatClassroom API: environment=%s, debug=%s",
        settings.environment,
        settings.debug,
    )

    # =========================================================================
    # Startup
    # =========================================================================

    database = Database(settings.database)
    if settings.database.auto_create:
        await database.create_all()
        logger.info("Database tables ensured")
    app.state.database = database

    channel = create_channel(settings.telegram)
    app.state.notifications = NotificationDispatcher(channel)
    logger.info("Notification channel: %s", channel.channel_type.value)

    app.state.blobs = LocalBlobStore.from_settings(settings.storage)

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================

    try:
        await app.state.notifications.close()
        logger.info("Notification dispatcher closed")
    except Exception as e:
        logger.warning("Error closing notification dispatcher: %s", str(e))

    await database.dispose()
    logger.info("Shutting down ChatClassroom API")


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate a domain error into a JSON response by its kind."""
    status_code = ERROR_STATUS.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("Domain operation failed: %s", exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Report storage failures without leaking driver details."""
    logger.error("Database error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error": "internal_error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Explicit settings. Defaults to get_settings(); tests pass
            their own so each app gets a private database and limiter.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="ChatClassroom API",
        description="Course, assignment and announcement backend for a chat classroom",
        version="1.0.0",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
        dependencies=[Depends(enforce_rate_limit)],
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.settings = settings
    app.state.limiter = create_limiter(settings.rate_limit)

    # =========================================================================
    # Exception handlers
    # =========================================================================
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    # Stored uploads are served directly when the public URL is a local path
    if settings.storage.public_url.startswith("/"):
        app.mount(
            settings.storage.public_url,
            StaticFiles(directory=settings.storage.root, check_dir=False),
            name="uploads",
        )

    return app
