# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course, co-teacher and enrollment models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin
from src.infrastructure.database.models.user import User
from src.utils.datetime import utc_now


class Course(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    """A course owned by the teacher who created it.

    ``access_code`` is generated once at creation, stored upper case and
    never changes.
    """

    __tablename__ = "courses"
    __table_args__ = (
        UniqueConstraint("access_code", name="uq_courses_access_code"),
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    access_code: Mapped[str] = mapped_column(String(32), nullable=False)
    teacher_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    owner: Mapped[User] = relationship(User, foreign_keys=[teacher_id])

    def __repr__(self) -> str:
        return f"<Course {self.id} code={self.access_code}>"


class CourseTeacher(UUIDPrimaryKeyMixin, Base):
    """Grants teacher-level authority over a course to a co-teacher."""

    __tablename__ = "course_teachers"
    __table_args__ = (
        UniqueConstraint("course_id", "user_id", name="uq_course_teachers_course_user"),
    )

    course_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    user: Mapped[User] = relationship(User)


class Enrollment(UUIDPrimaryKeyMixin, Base):
    """A student's membership in a course. One row per (course, user)."""

    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("course_id", "user_id", name="uq_enrollments_course_user"),
    )

    course_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    user: Mapped[User] = relationship(User)
