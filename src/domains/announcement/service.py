# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Announcement service for course announcements and their comments.

Posting an announcement notifies every enrolled student through the
notification dispatcher. Delivery runs in the background; a recipient who
cannot be reached is logged and skipped.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.authorization import AuthorizationService
from src.domains.course import CourseService
from src.domains.errors import DomainError, ForbiddenError, NotFoundError, ValidationError
from src.infrastructure.database.models import Announcement, Comment, Enrollment, User
from src.infrastructure.notifications import NotificationDispatcher

logger = logging.getLogger(__name__)

ANNOUNCEMENT_MESSAGE = "📢 New announcement in {course}:\n\n{title}\n\n{content}"


class AnnouncementServiceError(DomainError):
    """Base exception for announcement service errors."""

    pass


class AnnouncementNotFoundError(AnnouncementServiceError, NotFoundError):
    """Raised when announcement is not found."""

    pass


class InvalidAnnouncementError(AnnouncementServiceError, ValidationError):
    """Raised when announcement or comment input is blank."""

    pass


class CommentDeleteForbiddenError(AnnouncementServiceError, ForbiddenError):
    """Raised when a comment cannot be deleted by the caller."""

    pass


class AnnouncementService:
    """Service for announcements and comments.

    Attributes:
        _db: Async database session.
        _notifications: Dispatcher for announcement fan-out.
    """

    def __init__(
        self,
        db: AsyncSession,
        notifications: NotificationDispatcher | None = None,
        courses: CourseService | None = None,
        authorization: AuthorizationService | None = None,
    ) -> None:
        self._db = db
        self._notifications = notifications
        self._courses = courses or CourseService(db)
        self._authorization = authorization or AuthorizationService(db)

    async def post_announcement(
        self,
        course_id: str,
        caller: User,
        title: str,
        content: str,
    ) -> Announcement:
        """Post an announcement and notify the course's students.

        Args:
            course_id: Course identifier.
            caller: Acting user, who must teach the course.
            title: Announcement title.
            content: Announcement body.

        Returns:
            The created announcement.

        Raises:
            CourseNotFoundError: If course not found.
            NotCourseTeacherError: If caller does not teach the course.
            InvalidAnnouncementError: If title or content is blank.
        """
        course = await self._courses.get_course(course_id)
        await self._authorization.require_course_teacher(course, caller, "post announcements")

        title = (title or "").strip()
        content = (content or "").strip()
        if not title or not content:
            raise InvalidAnnouncementError("Announcement title and content are required")

        announcement = Announcement(course_id=course.id, title=title, content=content)
        self._db.add(announcement)
        await self._db.commit()
        await self._db.refresh(announcement)

        recipients = await self._student_identities(course.id)
        if self._notifications is not None:
            self._notifications.broadcast(
                recipients,
                ANNOUNCEMENT_MESSAGE.format(course=course.title, title=title, content=content),
            )

        logger.info(
            "Announcement posted: announcement=%s, course=%s, by=%s, recipients=%d",
            announcement.id,
            course.id,
            caller.id,
            len(recipients),
        )
        return announcement

    async def list_announcements(self, course_id: str) -> list[Announcement]:
        """List a course's announcements, newest first.

        Raises:
            CourseNotFoundError: If course not found.
        """
        await self._courses.get_course(course_id)
        stmt = (
            select(Announcement)
            .where(Announcement.course_id == course_id)
            .order_by(Announcement.created_at.desc())
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def get_announcement(self, announcement_id: str) -> Announcement:
        """Get an announcement by ID.

        Raises:
            AnnouncementNotFoundError: If announcement not found.
        """
        announcement = await self._db.get(Announcement, announcement_id)
        if announcement is None:
            raise AnnouncementNotFoundError(f"Announcement {announcement_id} not found")
        return announcement

    async def add_comment(self, announcement_id: str, caller: User, content: str) -> Comment:
        """Comment on an announcement.

        Args:
            announcement_id: Announcement identifier.
            caller: Acting user, who must teach or attend the course.
            content: Comment text.

        Returns:
            The created comment with its author loaded.

        Raises:
            AnnouncementNotFoundError: If announcement not found.
            NotCourseMemberError: If caller is not a course member.
            InvalidAnnouncementError: If content is blank.
        """
        announcement = await self.get_announcement(announcement_id)
        course = await self._courses.get_course(announcement.course_id)
        await self._authorization.require_course_member(course, caller, "comment")

        content = (content or "").strip()
        if not content:
            raise InvalidAnnouncementError("Comment content is required")

        comment = Comment(announcement_id=announcement.id, user_id=caller.id, content=content)
        self._db.add(comment)
        await self._db.commit()

        logger.info(
            "Comment added: comment=%s, announcement=%s, by=%s",
            comment.id,
            announcement.id,
            caller.id,
        )
        return await self._get_comment(comment.id)

    async def list_comments(self, announcement_id: str) -> list[Comment]:
        """List comments on an announcement, oldest first, with authors.

        Raises:
            AnnouncementNotFoundError: If announcement not found.
        """
        await self.get_announcement(announcement_id)
        stmt = (
            select(Comment)
            .options(selectinload(Comment.author))
            .where(Comment.announcement_id == announcement_id)
            .order_by(Comment.created_at)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def delete_comment(self, comment_id: str, caller: User) -> None:
        """Delete a comment written by the caller.

        A missing comment and someone else's comment are reported the same
        way so comment ids cannot be probed.

        Raises:
            CommentDeleteForbiddenError: If the comment does not exist or
                was written by someone else.
        """
        stmt = delete(Comment).where(Comment.id == comment_id, Comment.user_id == caller.id)
        result = await self._db.execute(stmt)
        if result.rowcount == 0:
            raise CommentDeleteForbiddenError("Comment not found or not yours")
        await self._db.commit()

        logger.info("Comment deleted: comment=%s, by=%s", comment_id, caller.id)

    async def _get_comment(self, comment_id: str) -> Comment:
        stmt = (
            select(Comment)
            .options(selectinload(Comment.author))
            .where(Comment.id == comment_id)
            .execution_options(populate_existing=True)
        )
        result = await self._db.execute(stmt)
        return result.scalar_one()

    async def _student_identities(self, course_id: str) -> list[str]:
        stmt = (
            select(User.external_identity)
            .join(Enrollment, Enrollment.user_id == User.id)
            .where(Enrollment.course_id == course_id)
            .order_by(Enrollment.enrolled_at)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())
