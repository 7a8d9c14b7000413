# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course and course teacher schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.models.common import ORMModel
from src.models.user import UserSummary


class CreateCourseRequest(BaseModel):
    """Request to create a course."""

    title: str = Field(..., min_length=1, max_length=200, description="Course title")
    description: str | None = Field(None, description="Course description")


class JoinCourseRequest(BaseModel):
    """Request to join a course with its access code."""

    access_code: str = Field(..., min_length=1, max_length=32, description="Access code")


class AddTeacherRequest(BaseModel):
    """Request to add a co-teacher to a course."""

    user_id: str = Field(..., description="ID of the user to add")


class CourseResponse(ORMModel):
    """Course details."""

    id: str = Field(..., description="Course ID")
    title: str = Field(..., description="Course title")
    description: str | None = Field(None, description="Course description")
    access_code: str = Field(..., description="Code students join with")
    teacher_id: str = Field(..., description="Owning teacher ID")
    created_at: datetime = Field(..., description="Creation time")


class CourseTeacherResponse(BaseModel):
    """A teacher of a course."""

    user: UserSummary = Field(..., description="Teacher")
    is_owner: bool = Field(..., description="Whether the teacher created the course")
    added_at: datetime | None = Field(None, description="When a co-teacher was added")
