# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignment service for coursework, submissions and grading.

This module provides the AssignmentService class for:
- Assignment creation by course teachers
- Student submissions (text, file or both)
- Grading with feedback

Each (assignment, student) pair has at most one submission. Submitting
again replaces the content and file and clears any grade, so a graded
submission goes back to the ungraded state until it is graded again.
"""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config.settings import CourseSettings
from src.domains.authorization import AuthorizationService
from src.domains.course import CourseService
from src.domains.errors import (
    DomainError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from src.infrastructure.database import DuplicateKeyError, insert_unique
from src.infrastructure.database.models import Assignment, Submission, User
from src.infrastructure.notifications import NotificationDispatcher
from src.infrastructure.storage import (
    BlobKind,
    BlobStore,
    BlobTooLargeError,
    InvalidBlobReferenceError,
)
from src.models.assignment import SubmissionResponse
from src.models.user import UserSummary
from src.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class AssignmentServiceError(DomainError):
    """Base exception for assignment service errors."""

    pass


class AssignmentNotFoundError(AssignmentServiceError, NotFoundError):
    """Raised when assignment is not found."""

    pass


class SubmissionNotFoundError(AssignmentServiceError, NotFoundError):
    """Raised when submission is not found."""

    pass


class InvalidAssignmentError(AssignmentServiceError, ValidationError):
    """Raised when assignment input is missing or malformed."""

    pass


class EmptySubmissionError(AssignmentServiceError, ValidationError):
    """Raised when a submission has neither content nor a file."""

    pass


class SubmissionFileTooLargeError(AssignmentServiceError, ValidationError):
    """Raised when a submitted file exceeds the upload limit."""

    pass


class InvalidGradeError(AssignmentServiceError, ValidationError):
    """Raised when a grade is outside 0..max_points."""

    pass


class NotEnrolledError(AssignmentServiceError, ForbiddenError):
    """Raised when a user submits to a course they are not enrolled in."""

    pass


class AssignmentService:
    """Service for assignments, submissions and grades.

    Attributes:
        _db: Async database session.
        _notifications: Dispatcher for receipts and grade messages.
        _blobs: Blob store for submitted files.
    """

    def __init__(
        self,
        db: AsyncSession,
        notifications: NotificationDispatcher | None = None,
        blobs: BlobStore | None = None,
        settings: CourseSettings | None = None,
        courses: CourseService | None = None,
        authorization: AuthorizationService | None = None,
    ) -> None:
        """Initialize assignment service.

        Args:
            db: Async database session.
            notifications: Notification dispatcher. Nothing is sent when None.
            blobs: Blob store used for submission files and download URLs.
            settings: Course policy settings.
            courses: Course service sharing the same session.
            authorization: Authorization service sharing the same session.
        """
        self._db = db
        self._notifications = notifications
        self._blobs = blobs
        self._settings = settings or CourseSettings()
        self._courses = courses or CourseService(db, self._settings)
        self._authorization = authorization or AuthorizationService(db)

    async def create_assignment(
        self,
        course_id: str,
        caller: User,
        title: str,
        description: str | None = None,
        due_date: datetime | None = None,
        max_points: int | None = None,
    ) -> Assignment:
        """Create an assignment in a course.

        Args:
            course_id: Course identifier.
            caller: Acting user, who must teach the course.
            title: Assignment title.
            description: Optional instructions.
            due_date: Optional due date.
            max_points: Maximum points, defaults to the configured value.

        Returns:
            The created assignment.

        Raises:
            CourseNotFoundError: If course not found.
            NotCourseTeacherError: If caller does not teach the course.
            InvalidAssignmentError: If title is blank or max_points is not
                a positive integer.
        """
        course = await self._courses.get_course(course_id)
        await self._authorization.require_course_teacher(course, caller, "create assignments")

        title = (title or "").strip()
        if not title:
            raise InvalidAssignmentError("Assignment title is required")

        if max_points is None:
            max_points = self._settings.default_max_points
        if isinstance(max_points, bool) or not isinstance(max_points, int) or max_points <= 0:
            raise InvalidAssignmentError("max_points must be a positive integer")

        assignment = Assignment(
            course_id=course.id,
            title=title,
            description=description.strip() if description else None,
            due_date=ensure_utc(due_date),
            max_points=max_points,
        )
        self._db.add(assignment)
        await self._db.commit()
        await self._db.refresh(assignment)

        logger.info(
            "Assignment created: assignment=%s, course=%s, by=%s",
            assignment.id,
            course.id,
            caller.id,
        )
        return assignment

    async def list_assignments(self, course_id: str) -> list[Assignment]:
        """List a course's assignments by due date, undated ones last.

        Raises:
            CourseNotFoundError: If course not found.
        """
        await self._courses.get_course(course_id)

        stmt = (
            select(Assignment)
            .where(Assignment.course_id == course_id)
            .order_by(
                Assignment.due_date.is_(None),
                Assignment.due_date,
                Assignment.created_at,
            )
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def get_assignment(self, assignment_id: str) -> Assignment:
        """Get an assignment by ID.

        Raises:
            AssignmentNotFoundError: If assignment not found.
        """
        assignment = await self._db.get(Assignment, assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(f"Assignment {assignment_id} not found")
        return assignment

    async def submit(
        self,
        assignment_id: str,
        user: User,
        content: str | None = None,
        file_reference: str | None = None,
        file_data: bytes | None = None,
        filename: str | None = None,
    ) -> SubmissionResponse:
        """Submit or resubmit work for an assignment.

        The first submission inserts a row. Later ones hit the unique
        (assignment, user) constraint and overwrite that row in a single
        UPDATE, which also clears grade, feedback and graded_at. The
        submission id never changes.

        Args:
            assignment_id: Assignment identifier.
            user: Submitting student.
            content: Text answer.
            file_reference: Reference of an already stored file.
            file_data: Raw file to store with the submission size limit.
            filename: Client file name of file_data.

        Returns:
            The stored submission.

        Raises:
            AssignmentNotFoundError: If assignment not found.
            EmptySubmissionError: If neither content nor a file is given.
            NotEnrolledError: If the user is not enrolled in the course.
            SubmissionFileTooLargeError: If file_data exceeds the limit.
        """
        assignment = await self.get_assignment(assignment_id)

        content = content.strip() if content else None
        has_file = bool(file_reference) or bool(file_data)
        if not content and not has_file:
            raise EmptySubmissionError("Submission needs content or a file")

        if not await self._authorization.is_enrolled(assignment.course_id, user.id):
            raise NotEnrolledError("Only enrolled students can submit to this assignment")

        stored_reference = None
        if file_data:
            file_reference = stored_reference = await self._store_file(file_data, filename or "")

        assignment_title = assignment.title
        user_id, identity = user.id, user.external_identity
        submitted_at = utc_now()

        try:
            resubmitted, previous_reference = await self._save_submission(
                assignment_id, user_id, content, file_reference, submitted_at
            )
        except Exception:
            # No row points at a file stored for a failed write
            if stored_reference:
                await self._discard_file(stored_reference)
            raise

        if previous_reference and previous_reference != file_reference:
            await self._discard_file(previous_reference)

        submission = await self._find_submission(assignment_id, user_id)
        if submission is None:
            raise SubmissionNotFoundError("Submission disappeared while saving")

        logger.info(
            "Submission saved: submission=%s, assignment=%s, student=%s, resubmitted=%s",
            submission.id,
            assignment_id,
            user_id,
            resubmitted,
        )
        self._notify(identity, f'✅ Assignment "{assignment_title}" submitted successfully!')
        return self._to_response(submission)

    async def grade(
        self,
        submission_id: str,
        caller: User,
        grade: int,
        feedback: str | None = None,
    ) -> SubmissionResponse:
        """Grade a submission.

        Args:
            submission_id: Submission identifier.
            caller: Acting user, who must teach the assignment's course.
            grade: Awarded points, between 0 and the assignment's max_points.
            feedback: Optional feedback for the student.

        Returns:
            The graded submission.

        Raises:
            SubmissionNotFoundError: If submission not found.
            NotCourseTeacherError: If caller does not teach the course.
            InvalidGradeError: If grade is out of range.
        """
        submission = await self._get_submission(submission_id)
        assignment = await self.get_assignment(submission.assignment_id)
        course = await self._courses.get_course(assignment.course_id)
        await self._authorization.require_course_teacher(course, caller, "grade submissions")

        if isinstance(grade, bool) or not isinstance(grade, int):
            raise InvalidGradeError("Grade must be an integer")
        if grade < 0 or grade > assignment.max_points:
            raise InvalidGradeError(f"Grade must be between 0 and {assignment.max_points}")

        submission.grade = grade
        submission.feedback = feedback.strip() if feedback else None
        submission.graded_at = utc_now()
        await self._db.commit()

        logger.info(
            "Submission graded: submission=%s, grade=%d/%d, by=%s",
            submission.id,
            grade,
            assignment.max_points,
            caller.id,
        )

        text = f'📝 "{assignment.title}" was graded: {grade}/{assignment.max_points}'
        if submission.feedback:
            text += f"\n\nFeedback: {submission.feedback}"
        self._notify(submission.user.external_identity, text)

        return self._to_response(submission)

    async def list_submissions(self, assignment_id: str) -> list[SubmissionResponse]:
        """List all submissions for an assignment with their students.

        Raises:
            AssignmentNotFoundError: If assignment not found.
        """
        await self.get_assignment(assignment_id)

        stmt = (
            select(Submission)
            .options(selectinload(Submission.user))
            .where(Submission.assignment_id == assignment_id)
            .order_by(Submission.submitted_at)
        )
        result = await self._db.execute(stmt)
        return [self._to_response(s) for s in result.scalars().all()]

    async def get_mine(self, assignment_id: str, user: User) -> SubmissionResponse:
        """Get the caller's own submission.

        Raises:
            AssignmentNotFoundError: If assignment not found.
            SubmissionNotFoundError: If the caller has not submitted.
        """
        await self.get_assignment(assignment_id)
        submission = await self._find_submission(assignment_id, user.id)
        if submission is None:
            raise SubmissionNotFoundError("You have not submitted this assignment")
        return self._to_response(submission)

    async def _get_submission(self, submission_id: str) -> Submission:
        stmt = (
            select(Submission)
            .options(selectinload(Submission.user))
            .where(Submission.id == submission_id)
        )
        result = await self._db.execute(stmt)
        submission = result.scalar_one_or_none()
        if submission is None:
            raise SubmissionNotFoundError(f"Submission {submission_id} not found")
        return submission

    async def _find_submission(self, assignment_id: str, user_id: str) -> Submission | None:
        stmt = (
            select(Submission)
            .options(selectinload(Submission.user))
            .where(
                Submission.assignment_id == assignment_id,
                Submission.user_id == user_id,
            )
            .execution_options(populate_existing=True)
        )
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def _save_submission(
        self,
        assignment_id: str,
        user_id: str,
        content: str | None,
        file_reference: str | None,
        submitted_at: datetime,
    ) -> tuple[bool, str | None]:
        """Insert the submission, or overwrite the existing one.

        Returns:
            Whether this was a resubmission, and the file reference the
            row held before it was overwritten.
        """
        try:
            await insert_unique(
                self._db,
                Submission(
                    assignment_id=assignment_id,
                    user_id=user_id,
                    content=content,
                    file_reference=file_reference,
                    submitted_at=submitted_at,
                ),
            )
            return False, None
        except DuplicateKeyError:
            pass

        where = (Submission.assignment_id == assignment_id, Submission.user_id == user_id)
        previous_reference = await self._db.scalar(select(Submission.file_reference).where(*where))
        await self._db.execute(
            update(Submission)
            .where(*where)
            .values(
                content=content,
                file_reference=file_reference,
                submitted_at=submitted_at,
                grade=None,
                feedback=None,
                graded_at=None,
            )
            .execution_options(synchronize_session=False)
        )
        await self._db.commit()
        return True, previous_reference

    async def _discard_file(self, reference: str) -> None:
        if self._blobs is None:
            return
        try:
            await self._blobs.delete(reference)
        except (InvalidBlobReferenceError, OSError) as e:
            logger.warning("Failed to delete submission file %s: %s", reference, e)

    async def _store_file(self, data: bytes, filename: str) -> str:
        if self._blobs is None:
            raise InvalidAssignmentError("File uploads are not available")
        try:
            return await self._blobs.store(data, filename, BlobKind.SUBMISSION)
        except BlobTooLargeError as e:
            raise SubmissionFileTooLargeError(
                f"File is too large, the limit is {e.limit // (1024 * 1024)} MB"
            ) from e

    def _notify(self, identity: str, text: str) -> None:
        if self._notifications is not None:
            self._notifications.dispatch(identity, text)

    def _to_response(self, submission: Submission) -> SubmissionResponse:
        """Convert Submission model to SubmissionResponse."""
        file_url = None
        if submission.file_reference and self._blobs is not None:
            file_url = self._blobs.resolve(submission.file_reference)

        return SubmissionResponse(
            id=submission.id,
            assignment_id=submission.assignment_id,
            user_id=submission.user_id,
            content=submission.content,
            file_reference=submission.file_reference,
            file_url=file_url,
            submitted_at=ensure_utc(submission.submitted_at),
            grade=submission.grade,
            feedback=submission.feedback,
            graded_at=ensure_utc(submission.graded_at),
            is_graded=submission.is_graded,
            student=UserSummary.model_validate(submission.user),
        )
