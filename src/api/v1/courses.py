# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course API endpoints.

This module provides endpoints for courses:
- GET / - List the caller's courses
- POST / - Create a course (teachers)
- POST /join - Join a course with its access code
- GET /{course_id} - Get course details (members)
- GET /{course_id}/students - List enrolled students (course teachers)

Course teacher endpoints:
- GET /{course_id}/teachers - List course teachers (members)
- POST /{course_id}/teachers - Add a co-teacher (owner)
- DELETE /{course_id}/teachers/{user_id} - Remove a co-teacher (owner)
"""

import logging

from fastapi import APIRouter, status

from src.api.dependencies import (
    AuthorizationServiceDep,
    CourseServiceDep,
    CurrentUser,
    EnrollmentServiceDep,
)
from src.models.course import (
    AddTeacherRequest,
    CourseResponse,
    CourseTeacherResponse,
    CreateCourseRequest,
    JoinCourseRequest,
)
from src.models.enrollment import EnrollmentResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[CourseResponse],
    summary="List my courses",
    description="Teachers get the courses they teach, students the courses they joined.",
)
async def list_courses(
    current_user: CurrentUser,
    service: CourseServiceDep,
) -> list[CourseResponse]:
    courses = await service.list_for_user(current_user)
    return [CourseResponse.model_validate(c) for c in courses]


@router.post(
    "",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create course",
    description="Create a course with a generated access code. Requires the teacher role.",
)
async def create_course(
    data: CreateCourseRequest,
    current_user: CurrentUser,
    service: CourseServiceDep,
) -> CourseResponse:
    course = await service.create_course(current_user, data.title, data.description)
    return CourseResponse.model_validate(course)


@router.post(
    "/join",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Join course",
    description="Enroll the caller in the course with the given access code.",
)
async def join_course(
    data: JoinCourseRequest,
    current_user: CurrentUser,
    service: EnrollmentServiceDep,
) -> CourseResponse:
    course = await service.join(current_user, data.access_code)
    return CourseResponse.model_validate(course)


@router.get(
    "/{course_id}",
    response_model=CourseResponse,
    summary="Get course",
)
async def get_course(
    course_id: str,
    current_user: CurrentUser,
    service: CourseServiceDep,
    authorization: AuthorizationServiceDep,
) -> CourseResponse:
    course = await service.get_course(course_id)
    await authorization.require_course_member(course, current_user, "view this course")
    return CourseResponse.model_validate(course)


@router.get(
    "/{course_id}/students",
    response_model=list[EnrollmentResponse],
    summary="List students",
    description="List enrolled students. Requires teaching the course.",
)
async def list_students(
    course_id: str,
    current_user: CurrentUser,
    courses: CourseServiceDep,
    authorization: AuthorizationServiceDep,
    service: EnrollmentServiceDep,
) -> list[EnrollmentResponse]:
    course = await courses.get_course(course_id)
    await authorization.require_course_teacher(course, current_user, "view enrolled students")
    return await service.list_students(course_id)


@router.get(
    "/{course_id}/teachers",
    response_model=list[CourseTeacherResponse],
    summary="List course teachers",
)
async def list_teachers(
    course_id: str,
    current_user: CurrentUser,
    service: CourseServiceDep,
    authorization: AuthorizationServiceDep,
) -> list[CourseTeacherResponse]:
    course = await service.get_course(course_id)
    await authorization.require_course_member(course, current_user, "view course teachers")
    return await service.list_teachers(course_id)


@router.post(
    "/{course_id}/teachers",
    response_model=CourseTeacherResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add co-teacher",
    description="Give another teacher access to the course. Requires owning the course.",
)
async def add_teacher(
    course_id: str,
    data: AddTeacherRequest,
    current_user: CurrentUser,
    service: CourseServiceDep,
) -> CourseTeacherResponse:
    return await service.add_co_teacher(course_id, current_user, data.user_id)


@router.delete(
    "/{course_id}/teachers/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove co-teacher",
)
async def remove_teacher(
    course_id: str,
    user_id: str,
    current_user: CurrentUser,
    service: CourseServiceDep,
) -> None:
    await service.remove_co_teacher(course_id, current_user, user_id)
