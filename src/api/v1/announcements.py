# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Announcement API endpoints.

This module provides endpoints for course announcements:
- GET /course/{course_id} - List a course's announcements (members)
- POST / - Post an announcement (course teachers)
- GET /{announcement_id}/comments - List comments (members)
- POST /{announcement_id}/comments - Add a comment (members)
"""

import logging

from fastapi import APIRouter, status

from src.api.dependencies import (
    AnnouncementServiceDep,
    AuthorizationServiceDep,
    CourseServiceDep,
    CurrentUser,
)
from src.models.announcement import (
    AnnouncementResponse,
    CommentResponse,
    CreateAnnouncementRequest,
    CreateCommentRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/course/{course_id}",
    response_model=list[AnnouncementResponse],
    summary="List announcements",
    description="List a course's announcements, newest first.",
)
async def list_announcements(
    course_id: str,
    current_user: CurrentUser,
    courses: CourseServiceDep,
    authorization: AuthorizationServiceDep,
    service: AnnouncementServiceDep,
) -> list[AnnouncementResponse]:
    course = await courses.get_course(course_id)
    await authorization.require_course_member(course, current_user, "view announcements")
    announcements = await service.list_announcements(course_id)
    return [AnnouncementResponse.model_validate(a) for a in announcements]


@router.post(
    "",
    response_model=AnnouncementResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post announcement",
    description="Post an announcement and notify enrolled students. Requires teaching the course.",
)
async def post_announcement(
    data: CreateAnnouncementRequest,
    current_user: CurrentUser,
    service: AnnouncementServiceDep,
) -> AnnouncementResponse:
    announcement = await service.post_announcement(
        data.course_id, current_user, data.title, data.content
    )
    return AnnouncementResponse.model_validate(announcement)


@router.get(
    "/{announcement_id}/comments",
    response_model=list[CommentResponse],
    summary="List comments",
)
async def list_comments(
    announcement_id: str,
    current_user: CurrentUser,
    courses: CourseServiceDep,
    authorization: AuthorizationServiceDep,
    service: AnnouncementServiceDep,
) -> list[CommentResponse]:
    announcement = await service.get_announcement(announcement_id)
    course = await courses.get_course(announcement.course_id)
    await authorization.require_course_member(course, current_user, "view comments")
    comments = await service.list_comments(announcement_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post(
    "/{announcement_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add comment",
)
async def add_comment(
    announcement_id: str,
    data: CreateCommentRequest,
    current_user: CurrentUser,
    service: AnnouncementServiceDep,
) -> CommentResponse:
    comment = await service.add_comment(announcement_id, current_user, data.content)
    return CommentResponse.model_validate(comment)
