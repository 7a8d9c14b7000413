# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database connection management using SQLAlchemy async.

The Database object owns the engine and sessionmaker. It is created once in
the application lifespan and handed to request handlers through
``app.state``; there is no module-level engine.

Uses SQLAlchemy 2.0 async API with asyncpg (PostgreSQL) or aiosqlite.

Example:
    database = Database(settings.database)
    await database.create_all()

    async with database.session() as session:
        result = await session.execute(select(Course))
        courses = result.scalars().all()

    await database.dispose()
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Optional

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.infrastructure.database.models import Base

if TYPE_CHECKING:
    from src.core.config.settings import DatabaseSettings


class DatabaseError(Exception):
    """Storage failure surfaced to services and mapped to HTTP 500.

    ``original_error`` keeps the driver exception for logging; it is never
    sent to clients.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error is None:
            return self.message
        return f"{self.message}: {self.original_error}"


def _on_sqlite_connect(dbapi_connection: Any, connection_record: Any) -> None:
    # Let SQLAlchemy emit BEGIN itself so SAVEPOINT works with the sqlite3 driver
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _on_sqlite_begin(conn: Any) -> None:
    conn.exec_driver_sql("BEGIN")


class Database:
    """Async engine and session factory for the application database.

    Attributes:
        url: Connection URL the engine was created with.
    """

    def __init__(self, settings: "DatabaseSettings") -> None:
        """Create the engine and sessionmaker.

        Args:
            settings: Database settings.

        Raises:
            DatabaseError: If engine creation fails.
        """
        self.url = settings.url

        engine_kwargs: dict[str, Any] = {"echo": settings.echo}
        if settings.is_sqlite:
            if ":memory:" in settings.url:
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_pre_ping=True,
                pool_recycle=1800,
            )

        try:
            self._engine: AsyncEngine = create_async_engine(settings.url, **engine_kwargs)
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to initialize database connection", e) from e

        if settings.is_sqlite:
            event.listen(self._engine.sync_engine, "connect", _on_sqlite_connect)
            event.listen(self._engine.sync_engine, "begin", _on_sqlite_begin)

        self._sessionmaker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        """The SQLAlchemy async engine."""
        return self._engine

    @property
    def sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        """The SQLAlchemy async sessionmaker."""
        return self._sessionmaker

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Get an async session.

        The session is committed on success and rolled back on exception.
        Domain errors raised inside the block propagate unchanged; raw
        SQLAlchemy failures are wrapped in DatabaseError.

        Yields:
            AsyncSession for database operations.

        Raises:
            DatabaseError: If a database operation fails.
        """
        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError("Database operation failed", e) from e
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop all tables. Used by tests."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def check_connection(self) -> bool:
        """Check if the database is reachable.

        Returns:
            True if the database is reachable, False otherwise.
        """
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self._engine.dispose()
