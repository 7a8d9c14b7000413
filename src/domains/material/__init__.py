# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Material domain package: files shared with a course by its teachers."""

from src.domains.material.service import (
    InvalidMaterialError,
    MaterialFileTooLargeError,
    MaterialService,
    MaterialServiceError,
)

__all__ = [
    "InvalidMaterialError",
    "MaterialFileTooLargeError",
    "MaterialService",
    "MaterialServiceError",
]
