# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Server entry point.

Usage:
    python -m src.main
"""

import uvicorn

from src.core.config import get_settings
from src.utils.logging import get_logger, setup_logging


def main() -> None:
    """Run the API server with the configured host, port and workers."""
    settings = get_settings()
    setup_logging(settings)
    logger = get_logger(__name__)

    workers = 1 if settings.api.reload else settings.api.workers
    logger.info(
        "Starting server",
        host=settings.api.host,
        port=settings.api.port,
        workers=workers,
        environment=settings.environment,
    )
    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        workers=workers,
        reload=settings.api.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
