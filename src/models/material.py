# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course material schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class MaterialResponse(BaseModel):
    """Uploaded course material."""

    id: str = Field(..., description="Material ID")
    course_id: str = Field(..., description="Course ID")
    title: str = Field(..., description="Title")
    file_reference: str = Field(..., description="Stored file reference")
    file_url: str = Field(..., description="Download URL")
    file_type: str | None = Field(None, description="File extension")
    uploaded_at: datetime = Field(..., description="Upload time")
