# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course domain package.

This package provides the course registry:
- Course creation with unique access codes
- Course lookup and listing
- Co-teacher management
"""

from src.domains.course.service import (
    ACCESS_CODE_ALPHABET,
    AccessCodeExhaustedError,
    AlreadyCoTeacherError,
    CourseNotFoundError,
    CourseService,
    CourseServiceError,
    InvalidCourseError,
    NotATeacherError,
    NotCourseOwnerError,
    TeacherNotFoundError,
    generate_access_code,
)

__all__ = [
    "ACCESS_CODE_ALPHABET",
    "AccessCodeExhaustedError",
    "AlreadyCoTeacherError",
    "CourseNotFoundError",
    "CourseService",
    "CourseServiceError",
    "InvalidCourseError",
    "NotATeacherError",
    "NotCourseOwnerError",
    "TeacherNotFoundError",
    "generate_access_code",
]
