# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignment API endpoints.

This module provides endpoints for coursework:
- GET /course/{course_id} - List a course's assignments (members)
- POST / - Create an assignment (course teachers)
- GET /{assignment_id} - Get assignment details (members)
- GET /{assignment_id}/submissions - List submissions (course teachers)
- POST /{assignment_id}/submit - Submit text and/or a file (enrolled students)
- GET /{assignment_id}/my-submission - Get the caller's submission
- POST /submissions/{submission_id}/grade - Grade a submission (course teachers)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from src.api.dependencies import (
    AssignmentServiceDep,
    AuthorizationServiceDep,
    Blobs,
    CourseServiceDep,
    CurrentUser,
)
from src.infrastructure.storage import BlobKind
from src.models.assignment import (
    AssignmentResponse,
    CreateAssignmentRequest,
    GradeSubmissionRequest,
    SubmissionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/course/{course_id}",
    response_model=list[AssignmentResponse],
    summary="List assignments",
    description="List a course's assignments ordered by due date.",
)
async def list_assignments(
    course_id: str,
    current_user: CurrentUser,
    courses: CourseServiceDep,
    authorization: AuthorizationServiceDep,
    service: AssignmentServiceDep,
) -> list[AssignmentResponse]:
    course = await courses.get_course(course_id)
    await authorization.require_course_member(course, current_user, "view assignments")
    assignments = await service.list_assignments(course_id)
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.post(
    "",
    response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create assignment",
    description="Create an assignment. Requires teaching the course.",
)
async def create_assignment(
    data: CreateAssignmentRequest,
    current_user: CurrentUser,
    service: AssignmentServiceDep,
) -> AssignmentResponse:
    assignment = await service.create_assignment(
        data.course_id,
        current_user,
        data.title,
        description=data.description,
        due_date=data.due_date,
        max_points=data.max_points,
    )
    return AssignmentResponse.model_validate(assignment)


@router.get(
    "/{assignment_id}",
    response_model=AssignmentResponse,
    summary="Get assignment",
)
async def get_assignment(
    assignment_id: str,
    current_user: CurrentUser,
    courses: CourseServiceDep,
    authorization: AuthorizationServiceDep,
    service: AssignmentServiceDep,
) -> AssignmentResponse:
    assignment = await service.get_assignment(assignment_id)
    course = await courses.get_course(assignment.course_id)
    await authorization.require_course_member(course, current_user, "view assignments")
    return AssignmentResponse.model_validate(assignment)


@router.get(
    "/{assignment_id}/submissions",
    response_model=list[SubmissionResponse],
    summary="List submissions",
    description="List all submissions with their students. Requires teaching the course.",
)
async def list_submissions(
    assignment_id: str,
    current_user: CurrentUser,
    courses: CourseServiceDep,
    authorization: AuthorizationServiceDep,
    service: AssignmentServiceDep,
) -> list[SubmissionResponse]:
    assignment = await service.get_assignment(assignment_id)
    course = await courses.get_course(assignment.course_id)
    await authorization.require_course_teacher(course, current_user, "view submissions")
    return await service.list_submissions(assignment_id)


@router.post(
    "/{assignment_id}/submit",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit assignment",
    description="Submit text, a file or both. Submitting again replaces the previous work.",
)
async def submit_assignment(
    assignment_id: str,
    current_user: CurrentUser,
    service: AssignmentServiceDep,
    blobs: Blobs,
    content: Annotated[str | None, Form()] = None,
    file: Annotated[UploadFile | None, File()] = None,
) -> SubmissionResponse:
    data = None
    filename = None
    if file is not None and file.filename:
        # One byte past the limit is enough to reject the upload
        data = await file.read(blobs.limit_for(BlobKind.SUBMISSION) + 1)
        filename = file.filename

    return await service.submit(
        assignment_id,
        current_user,
        content=content,
        file_data=data,
        filename=filename,
    )


@router.get(
    "/{assignment_id}/my-submission",
    response_model=SubmissionResponse,
    summary="Get my submission",
)
async def get_my_submission(
    assignment_id: str,
    current_user: CurrentUser,
    service: AssignmentServiceDep,
) -> SubmissionResponse:
    return await service.get_mine(assignment_id, current_user)


@router.post(
    "/submissions/{submission_id}/grade",
    response_model=SubmissionResponse,
    summary="Grade submission",
    description="Record a grade and feedback. Requires teaching the course.",
)
async def grade_submission(
    submission_id: str,
    data: GradeSubmissionRequest,
    current_user: CurrentUser,
    service: AssignmentServiceDep,
) -> SubmissionResponse:
    return await service.grade(submission_id, current_user, data.grade, data.feedback)
