# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignment domain package.

This package provides coursework functionality including:
- Assignment creation and listing
- Submissions and resubmissions
- Grading
"""

from src.domains.assignment.service import (
    AssignmentNotFoundError,
    AssignmentService,
    AssignmentServiceError,
    EmptySubmissionError,
    InvalidAssignmentError,
    InvalidGradeError,
    NotEnrolledError,
    SubmissionFileTooLargeError,
    SubmissionNotFoundError,
)

__all__ = [
    "AssignmentNotFoundError",
    "AssignmentService",
    "AssignmentServiceError",
    "EmptySubmissionError",
    "InvalidAssignmentError",
    "InvalidGradeError",
    "NotEnrolledError",
    "SubmissionFileTooLargeError",
    "SubmissionNotFoundError",
]
