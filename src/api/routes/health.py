# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Liveness endpoint reporting database reachability and the active chat channel."""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

_STARTED_AT = time.monotonic()


class ComponentHealth(BaseModel):
    status: str
    latency_ms: float | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    status: str = Field(description="healthy when every component is healthy")
    timestamp: datetime
    version: str
    environment: str
    uptime_seconds: int
    database: ComponentHealth
    notifications: ComponentHealth


async def _check_database(request: Request) -> ComponentHealth:
    started = time.perf_counter()
    reachable = await request.app.state.database.check_connection()
    if not reachable:
        logger.error("Database health check failed")
        return ComponentHealth(status="unhealthy", message="Database unreachable")
    elapsed_ms = (time.perf_counter() - started) * 1000
    return ComponentHealth(status="healthy", latency_ms=round(elapsed_ms, 2))


def _describe_notifications(request: Request) -> ComponentHealth:
    dispatcher = request.app.state.notifications
    channel = dispatcher.channel.channel_type.value
    return ComponentHealth(
        status="healthy",
        message=f"channel={channel}, pending={dispatcher.pending_count}",
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    database = await _check_database(request)
    return HealthResponse(
        status=database.status,
        timestamp=utc_now(),
        version=request.app.version,
        environment=request.app.state.settings.environment,
        uptime_seconds=int(time.monotonic() - _STARTED_AT),
        database=database,
        notifications=_describe_notifications(request),
    )
