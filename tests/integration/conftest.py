# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration test fixtures.

Services run against a fresh in-memory SQLite database per test, with
notifications captured by the recording channel from the root conftest.
"""

from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config.settings import DatabaseSettings
from src.domains.user import UserService
from src.infrastructure.database import Database
from src.infrastructure.database.models import User
from src.infrastructure.storage import BlobKind, LocalBlobStore
from src.models.common import UserRole

MakeUser = Callable[..., Awaitable[User]]


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Provide an empty in-memory database with all tables."""
    db = Database(DatabaseSettings(url="sqlite+aiosqlite:///:memory:"))
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session on the test database."""
    async with database.session() as db_session:
        yield db_session


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    """Provide a blob store writing into a temporary directory."""
    return LocalBlobStore(
        root=tmp_path / "uploads",
        public_url="/uploads",
        limits={BlobKind.SUBMISSION: 1024, BlobKind.MATERIAL: 4096},
    )


@pytest.fixture
def make_db_user(session: AsyncSession) -> MakeUser:
    """Create users through UserService, optionally promoted to teacher."""
    users = UserService(session)

    async def _make(identity: str, first_name: str | None = None, teacher: bool = False) -> User:
        user, _ = await users.resolve_or_create(identity, first_name=first_name)
        if teacher:
            user = await users.promote(user.id, UserRole.TEACHER)
        return user

    return _make
