# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides course enrollment functionality including:
- Joining a course with its access code
- Listing enrolled students
"""

from src.domains.enrollment.service import (
    AlreadyEnrolledError,
    EnrollmentService,
    EnrollmentServiceError,
    TeacherCannotEnrollError,
)

__all__ = [
    "AlreadyEnrolledError",
    "EnrollmentService",
    "EnrollmentServiceError",
    "TeacherCannotEnrollError",
]
