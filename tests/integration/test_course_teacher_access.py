# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for teacher-only actions across courses.

Holding the teacher role is not enough: only the owner and co-teachers of
a course may create assignments, grade and post announcements in it.
"""

import pytest
import pytest_asyncio

from src.domains.announcement import AnnouncementService
from src.domains.assignment import AssignmentService
from src.domains.authorization import NotCourseTeacherError
from src.domains.course import CourseService
from src.domains.enrollment import EnrollmentService

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def campus(session, make_db_user):
    """Algo101 with a submission, and a teacher who only owns Data201."""
    owner = await make_db_user("1001", "Owen", teacher=True)
    other_teacher = await make_db_user("1002", "Tara", teacher=True)
    co_teacher = await make_db_user("1003", "Cora", teacher=True)
    student = await make_db_user("2001", "Sam")

    courses = CourseService(session)
    algo = await courses.create_course(owner, "Algo101")
    await courses.create_course(other_teacher, "Data201")
    await EnrollmentService(session).join(student, algo.access_code)

    assignments = AssignmentService(session)
    hw1 = await assignments.create_assignment(algo.id, owner, "HW1", max_points=100)
    submission = await assignments.submit(hw1.id, student, content="my answer")
    return algo, owner, other_teacher, co_teacher, submission


class TestTeacherOfAnotherCourse:
    """Tests for a teacher acting on a course they do not teach."""

    @pytest.mark.asyncio
    async def test_cannot_create_assignment(self, session, campus):
        algo, _, other_teacher, _, _ = campus

        with pytest.raises(NotCourseTeacherError):
            await AssignmentService(session).create_assignment(algo.id, other_teacher, "HW2")

    @pytest.mark.asyncio
    async def test_cannot_grade(self, session, campus):
        _, _, other_teacher, _, submission = campus

        with pytest.raises(NotCourseTeacherError):
            await AssignmentService(session).grade(submission.id, other_teacher, 90)

    @pytest.mark.asyncio
    async def test_cannot_post_announcement(self, session, campus):
        algo, _, other_teacher, _, _ = campus

        with pytest.raises(NotCourseTeacherError):
            await AnnouncementService(session).post_announcement(
                algo.id, other_teacher, "Midterm", "Friday at 10"
            )

    @pytest.mark.asyncio
    async def test_submission_left_ungraded(self, session, campus):
        _, _, other_teacher, _, submission = campus
        assignments = AssignmentService(session)

        with pytest.raises(NotCourseTeacherError):
            await assignments.grade(submission.id, other_teacher, 90)

        listed = await assignments.list_submissions(submission.assignment_id)
        assert [s.grade for s in listed] == [None]


class TestCoTeacher:
    """Tests for a co-teacher added by the owner."""

    @pytest_asyncio.fixture
    async def co_taught(self, session, campus):
        algo, owner, _, co_teacher, submission = campus
        await CourseService(session).add_co_teacher(algo.id, owner, co_teacher.id)
        return algo, co_teacher, submission

    @pytest.mark.asyncio
    async def test_can_create_assignment(self, session, co_taught):
        algo, co_teacher, _ = co_taught

        assignment = await AssignmentService(session).create_assignment(algo.id, co_teacher, "HW2")

        assert assignment.course_id == algo.id

    @pytest.mark.asyncio
    async def test_can_grade(self, session, co_taught):
        _, co_teacher, submission = co_taught

        graded = await AssignmentService(session).grade(submission.id, co_teacher, 75, "Good")

        assert graded.grade == 75
        assert graded.is_graded is True

    @pytest.mark.asyncio
    async def test_can_post_announcement(self, session, co_taught):
        algo, co_teacher, _ = co_taught

        announcement = await AnnouncementService(session).post_announcement(
            algo.id, co_teacher, "Midterm", "Friday at 10"
        )

        assert announcement.course_id == algo.id
