# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for joining courses by access code.

This module provides the EnrollmentService class for:
- Student enrollment with a course access code
- Listing enrolled students
- Enrollment checks
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.authorization import AuthorizationService
from src.domains.course import CourseService
from src.domains.errors import ConflictError, DomainError, ValidationError
from src.infrastructure.database import DuplicateKeyError, insert_unique
from src.infrastructure.database.models import Course, Enrollment, User
from src.models.enrollment import EnrollmentResponse
from src.models.user import UserSummary

logger = logging.getLogger(__name__)


class EnrollmentServiceError(DomainError):
    """Base exception for enrollment service errors."""

    pass


class AlreadyEnrolledError(EnrollmentServiceError, ConflictError):
    """Raised when student is already enrolled in course."""

    pass


class TeacherCannotEnrollError(EnrollmentServiceError, ValidationError):
    """Raised when a teacher of the course tries to join it as a student."""

    pass


class EnrollmentService:
    """Service for managing course enrollments.

    Attributes:
        _db: Async database session.
        _courses: Course lookups.
        _authorization: Course role checks.
    """

    def __init__(
        self,
        db: AsyncSession,
        courses: CourseService | None = None,
        authorization: AuthorizationService | None = None,
    ) -> None:
        """Initialize enrollment service.

        Args:
            db: Async database session.
            courses: Course service sharing the same session.
            authorization: Authorization service sharing the same session.
        """
        self._db = db
        self._courses = courses or CourseService(db)
        self._authorization = authorization or AuthorizationService(db)

    async def join(self, user: User, access_code: str) -> Course:
        """Enroll a user in the course with the given access code.

        Joining twice is rejected by the unique (course, user) constraint,
        so concurrent joins never create duplicate rows.

        Args:
            user: The joining user.
            access_code: Course access code, case insensitive.

        Returns:
            The joined course.

        Raises:
            CourseNotFoundError: If no course has this code.
            TeacherCannotEnrollError: If the user teaches the course.
            AlreadyEnrolledError: If the user is already enrolled.
        """
        course = await self._courses.find_by_access_code(access_code)
        if await self._authorization.is_course_teacher(course, user):
            raise TeacherCannotEnrollError("Teachers cannot join their own course")

        course_id, course_title, user_id = course.id, course.title, user.id
        try:
            await insert_unique(self._db, Enrollment(course_id=course_id, user_id=user_id))
        except DuplicateKeyError:
            raise AlreadyEnrolledError(f"Already enrolled in {course_title}")

        logger.info("Enrolled student: student=%s, course=%s", user_id, course_id)
        return course

    async def list_students(self, course_id: str) -> list[EnrollmentResponse]:
        """List enrolled students in enrollment order.

        Raises:
            CourseNotFoundError: If course not found.
        """
        await self._courses.get_course(course_id)

        stmt = (
            select(Enrollment)
            .options(selectinload(Enrollment.user))
            .where(Enrollment.course_id == course_id)
            .order_by(Enrollment.enrolled_at)
        )
        result = await self._db.execute(stmt)
        return [self._to_response(e) for e in result.scalars().all()]

    async def is_enrolled(self, course_id: str, user_id: str) -> bool:
        """Check whether a user is enrolled in a course."""
        return await self._authorization.is_enrolled(course_id, user_id)

    def _to_response(self, enrollment: Enrollment) -> EnrollmentResponse:
        """Convert Enrollment model to EnrollmentResponse."""
        return EnrollmentResponse(
            id=enrollment.id,
            course_id=enrollment.course_id,
            student=UserSummary.model_validate(enrollment.user),
            enrolled_at=enrollment.enrolled_at,
        )
