# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Material service for files teachers share with a course."""

import logging
from pathlib import PurePosixPath

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.authorization import AuthorizationService
from src.domains.course import CourseService
from src.domains.errors import DomainError, ValidationError
from src.infrastructure.database.models import Material, User
from src.infrastructure.storage import BlobKind, BlobStore, BlobTooLargeError
from src.models.material import MaterialResponse
from src.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


class MaterialServiceError(DomainError):
    """Base exception for material service errors."""

    pass


class InvalidMaterialError(MaterialServiceError, ValidationError):
    """Raised when material input is missing or malformed."""

    pass


class MaterialFileTooLargeError(MaterialServiceError, ValidationError):
    """Raised when a material file exceeds the upload limit."""

    pass


class MaterialService:
    """Service for course materials.

    Attributes:
        _db: Async database session.
        _blobs: Blob store for material files.
    """

    def __init__(
        self,
        db: AsyncSession,
        blobs: BlobStore,
        courses: CourseService | None = None,
        authorization: AuthorizationService | None = None,
    ) -> None:
        self._db = db
        self._blobs = blobs
        self._courses = courses or CourseService(db)
        self._authorization = authorization or AuthorizationService(db)

    async def upload_material(
        self,
        course_id: str,
        caller: User,
        title: str,
        filename: str,
        data: bytes,
    ) -> MaterialResponse:
        """Store a file and record it as course material.

        Args:
            course_id: Course identifier.
            caller: Acting user, who must teach the course.
            title: Material title.
            filename: Client file name; its extension becomes file_type.
            data: File content.

        Returns:
            The recorded material.

        Raises:
            CourseNotFoundError: If course not found.
            NotCourseTeacherError: If caller does not teach the course.
            InvalidMaterialError: If title or file is missing.
            MaterialFileTooLargeError: If the file exceeds the limit.
        """
        course = await self._courses.get_course(course_id)
        await self._authorization.require_course_teacher(course, caller, "upload materials")

        title = (title or "").strip()
        if not title:
            raise InvalidMaterialError("Material title is required")
        if not data:
            raise InvalidMaterialError("Material file is required")

        try:
            reference = await self._blobs.store(data, filename, BlobKind.MATERIAL)
        except BlobTooLargeError as e:
            raise MaterialFileTooLargeError(
                f"File is too large, the limit is {e.limit // (1024 * 1024)} MB"
            ) from e

        suffix = PurePosixPath(filename or "").suffix.lstrip(".").lower()
        material = Material(
            course_id=course.id,
            title=title,
            file_reference=reference,
            file_type=suffix[:20] or None,
        )
        self._db.add(material)
        await self._db.commit()
        await self._db.refresh(material)

        logger.info(
            "Material uploaded: material=%s, course=%s, by=%s, size=%d",
            material.id,
            course.id,
            caller.id,
            len(data),
        )
        return self._to_response(material)

    async def list_materials(self, course_id: str) -> list[MaterialResponse]:
        """List a course's materials, newest first.

        Raises:
            CourseNotFoundError: If course not found.
        """
        await self._courses.get_course(course_id)
        stmt = (
            select(Material)
            .where(Material.course_id == course_id)
            .order_by(Material.uploaded_at.desc())
        )
        result = await self._db.execute(stmt)
        return [self._to_response(m) for m in result.scalars().all()]

    def _to_response(self, material: Material) -> MaterialResponse:
        """Convert Material model to MaterialResponse."""
        return MaterialResponse(
            id=material.id,
            course_id=material.course_id,
            title=material.title,
            file_reference=material.file_reference,
            file_url=self._blobs.resolve(material.file_reference),
            file_type=material.file_type,
            uploaded_at=ensure_utc(material.uploaded_at),
        )
