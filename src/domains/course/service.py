# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course service for creating courses and managing their teachers.

This module provides the CourseService class for:
- Course creation with a generated access code
- Course lookup by id and by access code
- Listing the courses a user teaches or attends
- Co-teacher management
"""

import logging
import secrets
from typing import Callable

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config.settings import CourseSettings
from src.domains.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from src.infrastructure.database import DuplicateKeyError, insert_unique
from src.infrastructure.database.models import Course, CourseTeacher, Enrollment, User
from src.models.common import UserRole
from src.models.course import CourseTeacherResponse
from src.models.user import UserSummary

logger = logging.getLogger(__name__)

# Uppercase letters and digits without the look-alikes 0, O, 1 and I
ACCESS_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"


def generate_access_code(length: int = 8) -> str:
    """Generate a random course access code.

    Args:
        length: Number of characters.

    Returns:
        Code drawn from ACCESS_CODE_ALPHABET with a CSPRNG.
    """
    return "".join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(length))


class CourseServiceError(DomainError):
    """Base exception for course service errors."""

    pass


class CourseNotFoundError(CourseServiceError, NotFoundError):
    """Raised when course is not found."""

    pass


class InvalidCourseError(CourseServiceError, ValidationError):
    """Raised when course input is missing or malformed."""

    pass


class NotATeacherError(CourseServiceError, ForbiddenError):
    """Raised when a user without the teacher role tries to create a course."""

    pass


class NotCourseOwnerError(CourseServiceError, ForbiddenError):
    """Raised when someone other than the owner manages co-teachers."""

    pass


class TeacherNotFoundError(CourseServiceError, NotFoundError):
    """Raised when the user to add or remove as co-teacher does not exist."""

    pass


class AlreadyCoTeacherError(CourseServiceError, ConflictError):
    """Raised when the user already co-teaches the course."""

    pass


class AccessCodeExhaustedError(CourseServiceError, InternalError):
    """Raised when no unique access code could be generated."""

    pass


class CourseService:
    """Service for managing courses.

    Attributes:
        _db: Async database session.
        _settings: Course policy settings.
        _generate_code: Access code generator, replaceable in tests.
    """

    def __init__(
        self,
        db: AsyncSession,
        settings: CourseSettings | None = None,
        code_generator: Callable[[int], str] = generate_access_code,
    ) -> None:
        """Initialize course service.

        Args:
            db: Async database session.
            settings: Course policy settings.
            code_generator: Function returning an access code of a given length.
        """
        self._db = db
        self._settings = settings or CourseSettings()
        self._generate_code = code_generator

    async def create_course(
        self,
        teacher: User,
        title: str,
        description: str | None = None,
    ) -> Course:
        """Create a course owned by the caller.

        The access code is generated here and never changes. A collision
        with an existing code is detected by the unique constraint and
        retried with a fresh code.

        Args:
            teacher: The creating user, who must have the teacher role.
            title: Course title.
            description: Optional description.

        Returns:
            The created course.

        Raises:
            NotATeacherError: If the caller is not a teacher.
            InvalidCourseError: If the title is blank.
            AccessCodeExhaustedError: If every generated code collided.
        """
        if teacher.role != UserRole.TEACHER.value:
            raise NotATeacherError("Only teachers can create courses")

        title = (title or "").strip()
        if not title:
            raise InvalidCourseError("Course title is required")
        description = description.strip() if description else None

        teacher_id = teacher.id
        attempts = self._settings.access_code_max_attempts
        for attempt in range(1, attempts + 1):
            course = Course(
                title=title,
                description=description,
                access_code=self._generate_code(self._settings.access_code_length),
                teacher_id=teacher_id,
            )
            try:
                course = await insert_unique(self._db, course)
            except DuplicateKeyError:
                logger.warning(
                    "Access code collision: attempt=%d/%d, teacher=%s",
                    attempt,
                    attempts,
                    teacher_id,
                )
                continue

            logger.info(
                "Course created: course=%s, code=%s, teacher=%s",
                course.id,
                course.access_code,
                teacher_id,
            )
            return course

        raise AccessCodeExhaustedError(
            f"Could not generate a unique access code after {attempts} attempts"
        )

    async def get_course(self, course_id: str) -> Course:
        """Get a course by ID.

        Raises:
            CourseNotFoundError: If course not found.
        """
        course = await self._db.get(Course, course_id)
        if course is None:
            raise CourseNotFoundError(f"Course {course_id} not found")
        return course

    async def find_by_access_code(self, code: str) -> Course:
        """Find a course by access code.

        Surrounding whitespace and letter case are ignored.

        Raises:
            CourseNotFoundError: If no course has this code.
        """
        normalized = (code or "").strip().upper()
        if not normalized:
            raise CourseNotFoundError("Course not found")

        stmt = select(Course).where(Course.access_code == normalized)
        result = await self._db.execute(stmt)
        course = result.scalar_one_or_none()
        if course is None:
            raise CourseNotFoundError(f"No course with access code {normalized}")
        return course

    async def list_for_user(self, user: User) -> list[Course]:
        """List the courses a user takes part in, newest first.

        Teachers get the courses they own or co-teach. Students get the
        courses they are enrolled in.
        """
        if user.role == UserRole.TEACHER.value:
            co_taught = select(CourseTeacher.course_id).where(CourseTeacher.user_id == user.id)
            stmt = select(Course).where(
                or_(Course.teacher_id == user.id, Course.id.in_(co_taught))
            )
        else:
            stmt = select(Course).join(Enrollment, Enrollment.course_id == Course.id).where(
                Enrollment.user_id == user.id
            )

        result = await self._db.execute(stmt.order_by(Course.created_at.desc()))
        return list(result.scalars().all())

    async def add_co_teacher(
        self,
        course_id: str,
        caller: User,
        user_id: str,
    ) -> CourseTeacherResponse:
        """Grant another teacher teacher-level access to a course.

        Args:
            course_id: Course identifier.
            caller: Acting user, who must own the course.
            user_id: User to add.

        Returns:
            The new course teacher entry.

        Raises:
            CourseNotFoundError: If course not found.
            NotCourseOwnerError: If caller does not own the course.
            TeacherNotFoundError: If the user to add does not exist.
            InvalidCourseError: If the user is the owner or not a teacher.
            AlreadyCoTeacherError: If the user already co-teaches the course.
        """
        course = await self.get_course(course_id)
        self._require_owner(course, caller)

        target = await self._db.get(User, user_id)
        if target is None:
            raise TeacherNotFoundError(f"User {user_id} not found")
        if target.id == course.teacher_id:
            raise InvalidCourseError("The course owner is already a teacher of the course")
        if target.role != UserRole.TEACHER.value:
            raise InvalidCourseError("Only users with the teacher role can co-teach")

        summary = UserSummary.model_validate(target)
        caller_id = caller.id
        try:
            entry = await insert_unique(
                self._db, CourseTeacher(course_id=course_id, user_id=user_id)
            )
        except DuplicateKeyError:
            raise AlreadyCoTeacherError("User already teaches this course")

        logger.info(
            "Co-teacher added: course=%s, user=%s, by=%s",
            course_id,
            user_id,
            caller_id,
        )
        return CourseTeacherResponse(user=summary, is_owner=False, added_at=entry.added_at)

    async def remove_co_teacher(self, course_id: str, caller: User, user_id: str) -> None:
        """Revoke a co-teacher's access to a course.

        Raises:
            CourseNotFoundError: If course not found.
            NotCourseOwnerError: If caller does not own the course.
            TeacherNotFoundError: If the user does not co-teach the course.
        """
        course = await self.get_course(course_id)
        self._require_owner(course, caller)

        stmt = delete(CourseTeacher).where(
            CourseTeacher.course_id == course_id,
            CourseTeacher.user_id == user_id,
        )
        result = await self._db.execute(stmt)
        if result.rowcount == 0:
            raise TeacherNotFoundError(f"User {user_id} does not co-teach this course")
        await self._db.commit()

        logger.info(
            "Co-teacher removed: course=%s, user=%s, by=%s",
            course_id,
            user_id,
            caller.id,
        )

    async def list_teachers(self, course_id: str) -> list[CourseTeacherResponse]:
        """List the owner followed by co-teachers in the order they were added.

        Raises:
            CourseNotFoundError: If course not found.
        """
        course = await self.get_course(course_id)
        owner = await self._db.get(User, course.teacher_id)

        teachers = []
        if owner is not None:
            teachers.append(
                CourseTeacherResponse(user=UserSummary.model_validate(owner), is_owner=True)
            )

        stmt = (
            select(CourseTeacher)
            .options(selectinload(CourseTeacher.user))
            .where(CourseTeacher.course_id == course_id)
            .order_by(CourseTeacher.added_at)
        )
        result = await self._db.execute(stmt)
        for entry in result.scalars().all():
            teachers.append(
                CourseTeacherResponse(
                    user=UserSummary.model_validate(entry.user),
                    is_owner=False,
                    added_at=entry.added_at,
                )
            )
        return teachers

    def _require_owner(self, course: Course, caller: User) -> None:
        if caller.role != UserRole.TEACHER.value or course.teacher_id != caller.id:
            raise NotCourseOwnerError("Only the course owner can manage course teachers")
