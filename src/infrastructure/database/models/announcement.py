# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Announcement and comment models."""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin
from src.infrastructure.database.models.user import User


class Announcement(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    """A course-wide message posted by a course teacher."""

    __tablename__ = "announcements"

    course_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)


class Comment(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    """A course member's reply to an announcement."""

    __tablename__ = "comments"

    announcement_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("announcements.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    author: Mapped[User] = relationship(User)
