# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Comment API endpoints.

- DELETE /{comment_id} - Delete one of the caller's comments
"""

from fastapi import APIRouter, status

from src.api.dependencies import AnnouncementServiceDep, CurrentUser

router = APIRouter()


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete comment",
    description="Delete a comment. Only its author can delete it.",
)
async def delete_comment(
    comment_id: str,
    current_user: CurrentUser,
    service: AnnouncementServiceDep,
) -> None:
    await service.delete_comment(comment_id, current_user)
