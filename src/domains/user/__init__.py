# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User domain package.

This package provides chat identity management:
- UserService: resolve-or-create on first contact, role changes
- Exceptions: User-related error types

Example:
    >>> from src.domains.user import UserService
    >>> service = UserService(db)
    >>> user, created = await service.resolve_or_create("42")
"""

from src.domains.user.service import (
    InvalidIdentityError,
    UserNotFoundError,
    UserOperationError,
    UserService,
    UserServiceError,
)

__all__ = [
    "InvalidIdentityError",
    "UserNotFoundError",
    "UserOperationError",
    "UserService",
    "UserServiceError",
]
