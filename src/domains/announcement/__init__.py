# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Announcement domain package.

This package provides course communication:
- Announcements with student notification fan-out
- Comments on announcements
"""

from src.domains.announcement.service import (
    ANNOUNCEMENT_MESSAGE,
    AnnouncementNotFoundError,
    AnnouncementService,
    AnnouncementServiceError,
    CommentDeleteForbiddenError,
    InvalidAnnouncementError,
)

__all__ = [
    "ANNOUNCEMENT_MESSAGE",
    "AnnouncementNotFoundError",
    "AnnouncementService",
    "AnnouncementServiceError",
    "CommentDeleteForbiddenError",
    "InvalidAnnouncementError",
]
