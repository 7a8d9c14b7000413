# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Error kinds shared by all domain services.

Every service defines its own specific exceptions (CourseNotFoundError,
AlreadyEnrolledError, ...) as subclasses of these kinds. The API layer maps
the kind to a transport status; it never needs to know the specific class.

- ValidationError: missing or malformed input
- NotFoundError: entity lookup miss
- ForbiddenError: authorization check failed
- ConflictError: uniqueness violation with a domain meaning
- InternalError: unexpected storage or collaborator failure
"""


class DomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: Human-readable error description.
        kind: Short machine-readable error kind.
    """

    kind = "domain_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when required input is missing or malformed."""

    kind = "validation_error"


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    kind = "not_found"


class ForbiddenError(DomainError):
    """Raised when the caller is not allowed to perform an action."""

    kind = "forbidden"


class ConflictError(DomainError):
    """Raised when an action collides with an existing record."""

    kind = "conflict"


class InternalError(DomainError):
    """Raised when an operation fails for reasons outside the caller's control."""

    kind = "internal_error"
