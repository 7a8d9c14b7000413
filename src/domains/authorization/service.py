# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course-scoped authorization rules.

A global teacher role is necessary but never sufficient to change a course:
the user must also own the course or be listed as one of its teachers.
Course members are its teachers plus its enrolled students.
"""

import logging

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.errors import ForbiddenError
from src.infrastructure.database.models import Course, CourseTeacher, Enrollment, User
from src.models.common import UserRole

logger = logging.getLogger(__name__)


class NotCourseTeacherError(ForbiddenError):
    """Raised when a teacher-only course action is attempted by someone else."""

    pass


class NotCourseMemberError(ForbiddenError):
    """Raised when a non-member tries to act inside a course."""

    pass


class AuthorizationService:
    """Answers who may do what inside a course.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def is_course_teacher(self, course: Course, user: User) -> bool:
        """Check whether the user teaches the course.

        Args:
            course: The course.
            user: The acting user.

        Returns:
            True if the user has the teacher role and owns or co-teaches
            the course.
        """
        if user.role != UserRole.TEACHER.value:
            return False
        if course.teacher_id == user.id:
            return True
        stmt = select(
            exists().where(
                CourseTeacher.course_id == course.id,
                CourseTeacher.user_id == user.id,
            )
        )
        return bool(await self._db.scalar(stmt))

    async def is_enrolled(self, course_id: str, user_id: str) -> bool:
        """Check whether the user is enrolled in the course."""
        stmt = select(
            exists().where(
                Enrollment.course_id == course_id,
                Enrollment.user_id == user_id,
            )
        )
        return bool(await self._db.scalar(stmt))

    async def is_course_member(self, course: Course, user: User) -> bool:
        """Check whether the user teaches or attends the course."""
        if await self.is_course_teacher(course, user):
            return True
        return await self.is_enrolled(course.id, user.id)

    async def require_course_teacher(self, course: Course, user: User, action: str) -> None:
        """Raise unless the user teaches the course.

        Args:
            course: The course.
            user: The acting user.
            action: Short description used in the error message,
                e.g. "create assignments".

        Raises:
            NotCourseTeacherError: If the user is not a course teacher.
        """
        if not await self.is_course_teacher(course, user):
            logger.info(
                "Denied teacher action: action=%s, course=%s, user=%s",
                action,
                course.id,
                user.id,
            )
            raise NotCourseTeacherError(f"Only course teachers can {action}")

    async def require_course_member(self, course: Course, user: User, action: str) -> None:
        """Raise unless the user teaches or attends the course.

        Raises:
            NotCourseMemberError: If the user is not a course member.
        """
        if not await self.is_course_member(course, user):
            logger.info(
                "Denied member action: action=%s, course=%s, user=%s",
                action,
                course.id,
                user.id,
            )
            raise NotCourseMemberError(f"Only course members can {action}")
