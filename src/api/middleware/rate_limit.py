# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-caller request limits backed by slowapi.

Callers that send a chat identity header are bucketed by that identity;
everything else shares a bucket per client address. One Limiter is built
per application so test apps never share counters.

The limit is checked by enforce_rate_limit(), an application-wide
dependency. It runs after routing, so it sees the matched endpoint however
the route was included.
"""

import logging
from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.api.middleware.request_context import IDENTITY_HEADER

if TYPE_CHECKING:
    from src.core.config.settings import RateLimitSettings

logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    identity = request.headers.get(IDENTITY_HEADER)
    return f"user:{identity}" if identity else f"ip:{get_remote_address(request)}"


def create_limiter(settings: "RateLimitSettings") -> Limiter:
    """Build a limiter whose default limit applies to every route."""
    return Limiter(
        key_func=get_client_identifier,
        default_limits=[f"{settings.requests_per_minute}/minute"],
        storage_uri=settings.storage_uri,
    )


def enforce_rate_limit(request: Request) -> None:
    """Count the request against the app limiter.

    Raises:
        RateLimitExceeded: If the caller is over the limit for this route.
    """
    limiter: Limiter = request.app.state.limiter
    if limiter.enabled:
        limiter._check_request_limit(request, request.scope.get("endpoint"), True)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer 429 with a Retry-After hint."""
    caller = get_client_identifier(request)
    logger.warning("Rate limit %s exceeded by %s", exc.detail, caller)
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please try again later.", "error": "rate_limited"},
        headers={"Retry-After": "60"},
    )
