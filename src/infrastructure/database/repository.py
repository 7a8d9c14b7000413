# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Insert helpers that surface uniqueness violations as a typed error.

Services never pre-check for an existing row before inserting a row that is
protected by a unique constraint. They attempt the insert and react to
DuplicateKeyError, which keeps concurrent joins and submissions race free.

Unique violations are recognised by driver error codes (PostgreSQL SQLSTATE
23505, SQLite extended result codes), not by message text.
"""

import logging
from typing import TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.connection import DatabaseError
from src.infrastructure.database.models import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

PG_UNIQUE_VIOLATION = "23505"
SQLITE_CONSTRAINT_UNIQUE = 2067
SQLITE_CONSTRAINT_PRIMARYKEY = 1555


class DuplicateKeyError(DatabaseError):
    """Raised when an insert violates a unique constraint.

    Attributes:
        table: Table the insert targeted.
    """

    def __init__(self, table: str, original_error: Exception | None = None) -> None:
        super().__init__(f"Duplicate key in {table}", original_error)
        self.table = table


def is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an IntegrityError was caused by a unique constraint.

    Args:
        error: The SQLAlchemy integrity error.

    Returns:
        True for unique or primary key violations.
    """
    candidates = [error.orig, getattr(error.orig, "__cause__", None)]
    for candidate in candidates:
        if candidate is None:
            continue
        sqlstate = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if sqlstate == PG_UNIQUE_VIOLATION:
            return True
        sqlite_code = getattr(candidate, "sqlite_errorcode", None)
        if sqlite_code in (SQLITE_CONSTRAINT_UNIQUE, SQLITE_CONSTRAINT_PRIMARYKEY):
            return True
    return False


async def insert_unique(db: AsyncSession, instance: ModelT) -> ModelT:
    """Insert and commit a row, mapping unique violations to DuplicateKeyError.

    The insert runs inside a SAVEPOINT. When it fails only the savepoint is
    rolled back, so the session stays usable and instances loaded earlier
    keep their state.

    Args:
        db: Async database session.
        instance: New model instance.

    Returns:
        The refreshed instance.

    Raises:
        DuplicateKeyError: If a unique constraint rejected the row.
        DatabaseError: For any other integrity failure.
    """
    table = instance.__tablename__
    try:
        async with db.begin_nested():
            db.add(instance)
    except IntegrityError as e:
        if is_unique_violation(e):
            logger.debug("Unique constraint rejected insert into %s", table)
            raise DuplicateKeyError(table, e) from e
        raise DatabaseError(f"Insert into {table} failed", e) from e

    await db.commit()
    await db.refresh(instance)
    return instance
