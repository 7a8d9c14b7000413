# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User model keyed by an external chat identity."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    """A person known to the system through their chat identity.

    Users are created on first contact and never deleted. ``role`` is
    either ``student`` or ``teacher``.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("external_identity", name="uq_users_external_identity"),
    )

    external_identity: Mapped[str] = mapped_column(String(64), nullable=False)
    username: Mapped[str | None] = mapped_column(String(64), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="student")

    @property
    def display_name(self) -> str:
        """Human readable name, falling back to username then identity."""
        full_name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full_name or self.username or self.external_identity

    @property
    def is_teacher(self) -> bool:
        """Whether the user holds the global teacher role."""
        return self.role == "teacher"

    def __repr__(self) -> str:
        return f"<User {self.id} identity={self.external_identity} role={self.role}>"
