# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User service for chat identities.

Users are never registered explicitly. The first message from a chat
identity creates a student account; later contacts return the same row and
refresh the profile fields the chat platform reports.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.errors import DomainError, InternalError, NotFoundError, ValidationError
from src.infrastructure.database import DuplicateKeyError, insert_unique
from src.infrastructure.database.models import User
from src.models.common import UserRole

logger = logging.getLogger(__name__)


class UserServiceError(DomainError):
    """Base exception for user service errors."""

    pass


class UserNotFoundError(UserServiceError, NotFoundError):
    """Raised when user is not found."""

    pass


class InvalidIdentityError(UserServiceError, ValidationError):
    """Raised when an external identity is blank."""

    pass


class UserOperationError(UserServiceError, InternalError):
    """Raised when a user operation fails unexpectedly."""

    pass


class UserService:
    """Service for resolving and updating users.

    Attributes:
        _db: Async database session.

    Example:
        >>> service = UserService(db)
        >>> user, created = await service.resolve_or_create("42", username="ada")
        >>> await service.promote(user.id, UserRole.TEACHER)
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the user service.

        Args:
            db: Async database session.
        """
        self._db = db

    async def resolve_or_create(
        self,
        external_identity: str,
        username: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> tuple[User, bool]:
        """Return the user for a chat identity, creating a student if needed.

        Concurrent first contacts race on the unique identity constraint;
        the loser of the race reads the row the winner inserted.

        Args:
            external_identity: Chat platform user id.
            username: Chat username.
            first_name: First name.
            last_name: Last name.

        Returns:
            Tuple of the user and whether it was created by this call.

        Raises:
            InvalidIdentityError: If the identity is blank.
            UserOperationError: If the user can be neither inserted nor read.
        """
        external_identity = (external_identity or "").strip()
        if not external_identity:
            raise InvalidIdentityError("External identity is required")

        profile = {
            "username": username,
            "first_name": first_name,
            "last_name": last_name,
        }

        existing = await self._get_by_identity(external_identity)
        if existing is not None:
            await self._refresh_profile(existing, profile)
            return existing, False

        user = User(
            external_identity=external_identity,
            role=UserRole.STUDENT.value,
            **profile,
        )
        try:
            user = await insert_unique(self._db, user)
        except DuplicateKeyError:
            existing = await self._get_by_identity(external_identity)
            if existing is None:
                raise UserOperationError(
                    f"Could not resolve user for identity {external_identity}"
                )
            return existing, False

        logger.info("User created: %s (identity=%s)", user.id, external_identity)
        return user, True

    async def promote(self, user_id: str, role: UserRole) -> User:
        """Set a user's global role.

        Args:
            user_id: User identifier.
            role: New role. Demoting a teacher back to student is allowed.

        Returns:
            The updated user.

        Raises:
            UserNotFoundError: If user not found.
        """
        user = await self.get_user(user_id)
        previous = user.role
        user.role = UserRole(role).value
        await self._db.commit()

        logger.info("User role changed: %s (%s -> %s)", user.id, previous, user.role)
        return user

    async def get_by_identity(self, external_identity: str) -> User:
        """Get a user by chat identity.

        Raises:
            UserNotFoundError: If no user has this identity.
        """
        user = await self._get_by_identity(external_identity)
        if user is None:
            raise UserNotFoundError(f"User with identity {external_identity} not found")
        return user

    async def get_user(self, user_id: str) -> User:
        """Get a user by ID.

        Raises:
            UserNotFoundError: If user not found.
        """
        user = await self._db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    async def _get_by_identity(self, external_identity: str) -> User | None:
        stmt = select(User).where(User.external_identity == external_identity)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def _refresh_profile(self, user: User, profile: dict[str, str | None]) -> None:
        changed = False
        for field, value in profile.items():
            if value is not None and getattr(user, field) != value:
                setattr(user, field, value)
                changed = True
        if changed:
            await self._db.commit()
