# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for ChatClassroom.

Importing this package registers every table on ``Base.metadata``.
"""

from src.infrastructure.database.models.announcement import Announcement, Comment
from src.infrastructure.database.models.base import Base, generate_uuid
from src.infrastructure.database.models.course import Course, CourseTeacher, Enrollment
from src.infrastructure.database.models.coursework import Assignment, Submission
from src.infrastructure.database.models.material import Material
from src.infrastructure.database.models.user import User

__all__ = [
    "Base",
    "generate_uuid",
    "User",
    "Course",
    "CourseTeacher",
    "Enrollment",
    "Assignment",
    "Submission",
    "Announcement",
    "Comment",
    "Material",
]
