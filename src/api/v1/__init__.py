# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific domain.

Modules:
    users: Chat user registration and role changes.
    courses: Courses, enrollment by access code, course teachers.
    assignments: Assignments, submissions and grading.
    announcements: Announcements and their comments.
    comments: Comment deletion.
    materials: Course material uploads.
"""

from fastapi import APIRouter

from src.api.v1 import announcements, assignments, comments, courses, materials, users

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(courses.router, prefix="/courses", tags=["Courses"])
router.include_router(assignments.router, prefix="/assignments", tags=["Assignments"])
router.include_router(announcements.router, prefix="/announcements", tags=["Announcements"])
router.include_router(comments.router, prefix="/comments", tags=["Comments"])
router.include_router(materials.router, prefix="/materials", tags=["Materials"])

__all__ = ["router"]
