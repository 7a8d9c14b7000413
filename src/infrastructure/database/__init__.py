# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure.

This package provides the SQLAlchemy async Database object, the ORM models
and the insert helper that turns unique violations into DuplicateKeyError.

Example:
    from src.infrastructure.database import Database

    database = Database(settings.database)
    async with database.session() as session:
        result = await session.execute(select(User))
"""

from src.infrastructure.database.connection import Database, DatabaseError
from src.infrastructure.database.repository import (
    DuplicateKeyError,
    insert_unique,
    is_unique_violation,
)

__all__ = [
    "Database",
    "DatabaseError",
    "DuplicateKeyError",
    "insert_unique",
    "is_unique_violation",
]
