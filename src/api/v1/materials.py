# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course material API endpoints.

This module provides endpoints for course files:
- GET /course/{course_id} - List a course's materials (members)
- POST / - Upload a material (course teachers, multipart)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from src.api.dependencies import (
    AuthorizationServiceDep,
    Blobs,
    CourseServiceDep,
    CurrentUser,
    MaterialServiceDep,
)
from src.infrastructure.storage import BlobKind
from src.models.material import MaterialResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/course/{course_id}",
    response_model=list[MaterialResponse],
    summary="List materials",
)
async def list_materials(
    course_id: str,
    current_user: CurrentUser,
    courses: CourseServiceDep,
    authorization: AuthorizationServiceDep,
    service: MaterialServiceDep,
) -> list[MaterialResponse]:
    course = await courses.get_course(course_id)
    await authorization.require_course_member(course, current_user, "view materials")
    return await service.list_materials(course_id)


@router.post(
    "",
    response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload material",
    description="Upload a file for the course. Requires teaching the course.",
)
async def upload_material(
    current_user: CurrentUser,
    service: MaterialServiceDep,
    blobs: Blobs,
    course_id: Annotated[str, Form()],
    title: Annotated[str, Form()],
    file: Annotated[UploadFile, File()],
) -> MaterialResponse:
    data = await file.read(blobs.limit_for(BlobKind.MATERIAL) + 1)
    return await service.upload_material(
        course_id,
        current_user,
        title,
        file.filename or "",
        data,
    )
