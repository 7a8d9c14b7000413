# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User API endpoints.

This module provides endpoints for chat users:
- POST / - Register a chat identity or refresh its profile
- GET /me - Get the caller
- PUT /me/role - Change the caller's role
"""

import logging

from fastapi import APIRouter, Response, status

from src.api.dependencies import CurrentUser, UserServiceDep
from src.models.user import ResolveUserRequest, UpdateRoleRequest, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Create a student account on first contact or return the existing one.",
)
async def resolve_user(
    data: ResolveUserRequest,
    response: Response,
    service: UserServiceDep,
) -> UserResponse:
    """Resolve or create the user for a chat identity.

    Responds with 201 when the user was created and 200 otherwise.
    """
    user, created = await service.resolve_or_create(
        data.external_identity,
        username=data.username,
        first_name=data.first_name,
        last_name=data.last_name,
    )
    if not created:
        response.status_code = status.HTTP_200_OK
    return UserResponse.model_validate(user)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Return the calling user."""
    return UserResponse.model_validate(current_user)


@router.put(
    "/me/role",
    response_model=UserResponse,
    summary="Change role",
    description="Switch the caller between the student and teacher roles.",
)
async def update_my_role(
    data: UpdateRoleRequest,
    current_user: CurrentUser,
    service: UserServiceDep,
) -> UserResponse:
    """Change the caller's global role."""
    user = await service.promote(current_user.id, data.role)
    return UserResponse.model_validate(user)
