# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignment and submission schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.models.common import ORMModel
from src.models.user import UserSummary


class CreateAssignmentRequest(BaseModel):
    """Request to create an assignment."""

    course_id: str = Field(..., description="Course ID")
    title: str = Field(..., min_length=1, max_length=200, description="Assignment title")
    description: str | None = Field(None, description="Instructions")
    due_date: datetime | None = Field(None, description="Due date")
    max_points: int | None = Field(None, gt=0, description="Maximum points")


class GradeSubmissionRequest(BaseModel):
    """Request to grade a submission."""

    grade: int = Field(..., description="Awarded points")
    feedback: str | None = Field(None, description="Feedback for the student")


class AssignmentResponse(ORMModel):
    """Assignment details."""

    id: str = Field(..., description="Assignment ID")
    course_id: str = Field(..., description="Course ID")
    title: str = Field(..., description="Assignment title")
    description: str | None = Field(None, description="Instructions")
    due_date: datetime | None = Field(None, description="Due date")
    max_points: int = Field(..., description="Maximum points")
    created_at: datetime = Field(..., description="Creation time")


class SubmissionResponse(BaseModel):
    """A student's submission for an assignment."""

    id: str = Field(..., description="Submission ID")
    assignment_id: str = Field(..., description="Assignment ID")
    user_id: str = Field(..., description="Submitting student ID")
    content: str | None = Field(None, description="Text answer")
    file_reference: str | None = Field(None, description="Stored file reference")
    file_url: str | None = Field(None, description="Download URL of the file")
    submitted_at: datetime = Field(..., description="Last submission time")
    grade: int | None = Field(None, description="Awarded points")
    feedback: str | None = Field(None, description="Teacher feedback")
    graded_at: datetime | None = Field(None, description="Grading time")
    is_graded: bool = Field(..., description="Whether a grade is recorded")
    student: UserSummary | None = Field(None, description="Submitting student")
