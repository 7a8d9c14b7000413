# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for EnrollmentService."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.domains.course import CourseNotFoundError
from src.domains.enrollment import (
    AlreadyEnrolledError,
    EnrollmentService,
    TeacherCannotEnrollError,
)
from src.infrastructure.database import DuplicateKeyError


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def mock_courses(sample_course):
    courses = AsyncMock()
    courses.find_by_access_code.return_value = sample_course
    return courses


@pytest.fixture
def mock_authorization():
    authorization = AsyncMock()
    authorization.is_course_teacher.return_value = False
    return authorization


@pytest.fixture
def enrollment_service(mock_db, mock_courses, mock_authorization):
    """Create enrollment service with mocked collaborators."""
    return EnrollmentService(mock_db, courses=mock_courses, authorization=mock_authorization)


class TestJoin:
    """Tests for joining a course by access code."""

    @pytest.mark.asyncio
    async def test_join_success(self, enrollment_service, mock_courses, sample_course, sample_student):
        insert = AsyncMock(side_effect=lambda db, instance: instance)

        with patch("src.domains.enrollment.service.insert_unique", insert):
            course = await enrollment_service.join(sample_student, "abcd2345")

        assert course is sample_course
        mock_courses.find_by_access_code.assert_awaited_once_with("abcd2345")
        enrollment = insert.await_args.args[1]
        assert enrollment.course_id == sample_course.id
        assert enrollment.user_id == sample_student.id

    @pytest.mark.asyncio
    async def test_join_twice_conflicts(self, enrollment_service, sample_student):
        insert = AsyncMock(side_effect=DuplicateKeyError("enrollments"))

        with patch("src.domains.enrollment.service.insert_unique", insert):
            with pytest.raises(AlreadyEnrolledError, match="Algo101") as exc_info:
                await enrollment_service.join(sample_student, "ABCD2345")

        assert exc_info.value.kind == "conflict"

    @pytest.mark.asyncio
    async def test_unknown_code(self, enrollment_service, mock_courses, sample_student):
        mock_courses.find_by_access_code.side_effect = CourseNotFoundError("No course")
        insert = AsyncMock()

        with patch("src.domains.enrollment.service.insert_unique", insert):
            with pytest.raises(CourseNotFoundError):
                await enrollment_service.join(sample_student, "NOPE2345")

        insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_course_teacher_cannot_join(
        self, enrollment_service, mock_authorization, sample_teacher
    ):
        mock_authorization.is_course_teacher.return_value = True

        with pytest.raises(TeacherCannotEnrollError) as exc_info:
            await enrollment_service.join(sample_teacher, "ABCD2345")

        assert exc_info.value.kind == "validation_error"


class TestIsEnrolled:
    @pytest.mark.asyncio
    async def test_delegates_to_authorization(self, enrollment_service, mock_authorization):
        mock_authorization.is_enrolled.return_value = True

        assert await enrollment_service.is_enrolled("course", "user") is True
        mock_authorization.is_enrolled.assert_awaited_once_with("course", "user")
