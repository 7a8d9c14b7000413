# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authorization domain package.

Provides AuthorizationService with the course teacher and course member
checks used by every course-scoped operation.
"""

from src.domains.authorization.service import (
    AuthorizationService,
    NotCourseMemberError,
    NotCourseTeacherError,
)

__all__ = [
    "AuthorizationService",
    "NotCourseMemberError",
    "NotCourseTeacherError",
]
