# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.models.user import UserSummary


class EnrollmentResponse(BaseModel):
    """An enrolled student of a course."""

    id: str = Field(..., description="Enrollment ID")
    course_id: str = Field(..., description="Course ID")
    student: UserSummary = Field(..., description="Enrolled student")
    enrolled_at: datetime = Field(..., description="Enrollment time")
