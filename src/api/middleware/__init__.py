# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware package.

- request_context: binds request id and caller to log records
- rate_limit: slowapi limiter keyed by caller identity
"""

from src.api.middleware.rate_limit import (
    create_limiter,
    enforce_rate_limit,
    get_client_identifier,
    rate_limit_exceeded_handler,
)
from src.api.middleware.request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
    "create_limiter",
    "enforce_rate_limit",
    "get_client_identifier",
    "rate_limit_exceeded_handler",
]
