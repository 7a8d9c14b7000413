# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared enums and base models for request and response schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class UserRole(str, Enum):
    """Global role of a user."""

    STUDENT = "student"
    TEACHER = "teacher"


class ORMModel(BaseModel):
    """Response model populated from ORM instances."""

    model_config = ConfigDict(from_attributes=True)
