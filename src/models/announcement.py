# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Announcement and comment schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.models.common import ORMModel
from src.models.user import UserSummary


class CreateAnnouncementRequest(BaseModel):
    """Request to post an announcement."""

    course_id: str = Field(..., description="Course ID")
    title: str = Field(..., min_length=1, max_length=200, description="Title")
    content: str = Field(..., min_length=1, description="Body")


class CreateCommentRequest(BaseModel):
    """Request to comment on an announcement."""

    content: str = Field(..., min_length=1, description="Comment text")


class AnnouncementResponse(ORMModel):
    """Announcement details."""

    id: str = Field(..., description="Announcement ID")
    course_id: str = Field(..., description="Course ID")
    title: str = Field(..., description="Title")
    content: str = Field(..., description="Body")
    created_at: datetime = Field(..., description="Posting time")


class CommentResponse(ORMModel):
    """Comment with its author."""

    id: str = Field(..., description="Comment ID")
    announcement_id: str = Field(..., description="Announcement ID")
    user_id: str = Field(..., description="Author ID")
    content: str = Field(..., description="Comment text")
    created_at: datetime = Field(..., description="Posting time")
    author: UserSummary = Field(..., description="Author")
