# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for announcements, fan-out and comments."""

import logging

import pytest
import pytest_asyncio

from src.domains.announcement import AnnouncementService, CommentDeleteForbiddenError
from src.domains.authorization import NotCourseMemberError, NotCourseTeacherError
from src.domains.course import CourseService
from src.domains.enrollment import EnrollmentService

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def classroom(session, make_db_user):
    """A course with an owner and three enrolled students."""
    teacher = await make_db_user("1001", "Tess", teacher=True)
    course = await CourseService(session).create_course(teacher, "Algo101")
    students = []
    for identity in ("2001", "2002", "2003"):
        student = await make_db_user(identity)
        await EnrollmentService(session).join(student, course.access_code)
        students.append(student)
    return course, teacher, students


@pytest.fixture
def announcements(session, dispatcher) -> AnnouncementService:
    return AnnouncementService(session, notifications=dispatcher)


class TestAnnouncementFanOut:
    """Tests for notifying students about announcements."""

    @pytest.mark.asyncio
    async def test_every_student_is_notified_despite_failure(
        self, announcements, classroom, recording_channel, dispatcher, caplog
    ):
        course, teacher, _ = classroom
        recording_channel.raising.add("2002")

        with caplog.at_level(logging.WARNING):
            announcement = await announcements.post_announcement(
                course.id, teacher, "Midterm date", "Friday at 10:00"
            )
            await dispatcher.flush()

        assert announcement.id is not None
        assert sorted(identity for identity, _ in recording_channel.sent) == [
            "2001",
            "2002",
            "2003",
        ]
        assert recording_channel.messages_for("2003") == [
            "📢 New announcement in Algo101:\n\nMidterm date\n\nFriday at 10:00"
        ]
        assert "Notification to 2002 raised" in caplog.text
        assert recording_channel.messages_for("1001") == []

    @pytest.mark.asyncio
    async def test_student_cannot_post(self, announcements, classroom, recording_channel, dispatcher):
        course, _, students = classroom

        with pytest.raises(NotCourseTeacherError):
            await announcements.post_announcement(course.id, students[0], "Hi", "All")

        await dispatcher.flush()
        assert recording_channel.sent == []

    @pytest.mark.asyncio
    async def test_list_newest_first(self, announcements, classroom):
        course, teacher, _ = classroom
        await announcements.post_announcement(course.id, teacher, "First", "a")
        await announcements.post_announcement(course.id, teacher, "Second", "b")

        listed = await announcements.list_announcements(course.id)

        assert [a.title for a in listed] == ["Second", "First"]


class TestComments:
    """Tests for comment rules."""

    @pytest.mark.asyncio
    async def test_members_comment_in_order(self, announcements, classroom):
        course, teacher, students = classroom
        announcement = await announcements.post_announcement(course.id, teacher, "Midterm", "Fri")

        first = await announcements.add_comment(announcement.id, students[0], "Which room?")
        await announcements.add_comment(announcement.id, teacher, "Room 4")

        assert first.author.external_identity == "2001"
        comments = await announcements.list_comments(announcement.id)
        assert [(c.author.external_identity, c.content) for c in comments] == [
            ("2001", "Which room?"),
            ("1001", "Room 4"),
        ]

    @pytest.mark.asyncio
    async def test_outsider_cannot_comment(self, announcements, classroom, make_db_user):
        course, teacher, _ = classroom
        outsider = await make_db_user("3001")
        announcement = await announcements.post_announcement(course.id, teacher, "Midterm", "Fri")

        with pytest.raises(NotCourseMemberError):
            await announcements.add_comment(announcement.id, outsider, "Hello")

    @pytest.mark.asyncio
    async def test_only_author_deletes(self, announcements, classroom):
        course, teacher, students = classroom
        announcement = await announcements.post_announcement(course.id, teacher, "Midterm", "Fri")
        comment = await announcements.add_comment(announcement.id, students[0], "Which room?")

        with pytest.raises(CommentDeleteForbiddenError):
            await announcements.delete_comment(comment.id, teacher)
        with pytest.raises(CommentDeleteForbiddenError):
            await announcements.delete_comment("missing", students[0])

        await announcements.delete_comment(comment.id, students[0])

        assert await announcements.list_comments(announcement.id) == []
