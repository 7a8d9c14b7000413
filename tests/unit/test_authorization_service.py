# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for course authorization rules."""

from unittest.mock import AsyncMock

import pytest

from src.domains.authorization import (
    AuthorizationService,
    NotCourseMemberError,
    NotCourseTeacherError,
)
from src.domains.errors import ForbiddenError


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.scalar = AsyncMock(return_value=False)
    return db


@pytest.fixture
def authorization(mock_db):
    return AuthorizationService(mock_db)


class TestIsCourseTeacher:
    """Tests for the course teacher predicate."""

    @pytest.mark.asyncio
    async def test_owner_with_teacher_role(self, authorization, mock_db, sample_course, sample_teacher):
        assert await authorization.is_course_teacher(sample_course, sample_teacher) is True
        mock_db.scalar.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owner_demoted_to_student_is_not_teacher(self, authorization, sample_course, sample_teacher):
        """Ownership alone does not authorize without the teacher role."""
        sample_teacher.role = "student"

        assert await authorization.is_course_teacher(sample_course, sample_teacher) is False

    @pytest.mark.asyncio
    async def test_co_teacher(self, authorization, mock_db, sample_course, make_user):
        co_teacher = make_user(role="teacher")
        mock_db.scalar.return_value = True

        assert await authorization.is_course_teacher(sample_course, co_teacher) is True
        mock_db.scalar.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unrelated_teacher(self, authorization, sample_course, make_user):
        """A global teacher without a link to the course is not its teacher."""
        other = make_user(role="teacher")

        assert await authorization.is_course_teacher(sample_course, other) is False

    @pytest.mark.asyncio
    async def test_student_never_checks_membership_table(self, authorization, mock_db, sample_course, sample_student):
        assert await authorization.is_course_teacher(sample_course, sample_student) is False
        mock_db.scalar.assert_not_awaited()


class TestIsCourseMember:
    """Tests for the course member predicate."""

    @pytest.mark.asyncio
    async def test_enrolled_student(self, authorization, mock_db, sample_course, sample_student):
        mock_db.scalar.return_value = True

        assert await authorization.is_course_member(sample_course, sample_student) is True

    @pytest.mark.asyncio
    async def test_stranger(self, authorization, sample_course, sample_student):
        assert await authorization.is_course_member(sample_course, sample_student) is False

    @pytest.mark.asyncio
    async def test_owner_is_member(self, authorization, sample_course, sample_teacher):
        assert await authorization.is_course_member(sample_course, sample_teacher) is True


class TestRequire:
    """Tests for the raising variants."""

    @pytest.mark.asyncio
    async def test_require_course_teacher_raises_forbidden(self, authorization, sample_course, sample_student):
        with pytest.raises(NotCourseTeacherError, match="grade submissions") as exc_info:
            await authorization.require_course_teacher(sample_course, sample_student, "grade submissions")

        assert isinstance(exc_info.value, ForbiddenError)
        assert exc_info.value.kind == "forbidden"

    @pytest.mark.asyncio
    async def test_require_course_teacher_passes_for_owner(self, authorization, sample_course, sample_teacher):
        await authorization.require_course_teacher(sample_course, sample_teacher, "post announcements")

    @pytest.mark.asyncio
    async def test_require_course_member_raises_forbidden(self, authorization, sample_course, sample_student):
        with pytest.raises(NotCourseMemberError):
            await authorization.require_course_member(sample_course, sample_student, "comment")
