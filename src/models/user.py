# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.models.common import ORMModel, UserRole


class ResolveUserRequest(BaseModel):
    """Register a chat user on first contact, or refresh their profile."""

    external_identity: str = Field(
        ..., min_length=1, max_length=64, description="Chat platform user id"
    )
    username: str | None = Field(None, max_length=64, description="Chat username")
    first_name: str | None = Field(None, max_length=100, description="First name")
    last_name: str | None = Field(None, max_length=100, description="Last name")


class UpdateRoleRequest(BaseModel):
    """Change the caller's global role."""

    role: UserRole = Field(..., description="New role")


class UserSummary(ORMModel):
    """Minimal user info embedded in other responses."""

    id: str = Field(..., description="User ID")
    external_identity: str = Field(..., description="Chat platform user id")
    username: str | None = Field(None, description="Chat username")
    first_name: str | None = Field(None, description="First name")
    last_name: str | None = Field(None, description="Last name")
    display_name: str = Field(..., description="Name to show in clients")


class UserResponse(UserSummary):
    """Full user details."""

    role: UserRole = Field(..., description="Global role")
    created_at: datetime = Field(..., description="Registration time")
