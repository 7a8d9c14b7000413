# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Blob store interface for uploaded files.

Submissions and course materials are stored as opaque blobs. The database
keeps only the reference string returned by store(); resolve() turns a
reference into a URL a client can download from.
"""

from abc import ABC, abstractmethod
from enum import Enum


class BlobKind(str, Enum):
    """Kind of uploaded file, which decides its size limit and location."""

    SUBMISSION = "submissions"
    MATERIAL = "materials"


class BlobStoreError(Exception):
    """Base exception for blob store operations."""


class BlobTooLargeError(BlobStoreError):
    """Raised when a blob exceeds the limit configured for its kind.

    Attributes:
        kind: Kind of the rejected blob.
        size: Size of the rejected blob in bytes.
        limit: Configured limit in bytes.
    """

    def __init__(self, kind: BlobKind, size: int, limit: int) -> None:
        super().__init__(
            f"{kind.value} upload of {size} bytes exceeds the {limit} byte limit"
        )
        self.kind = kind
        self.size = size
        self.limit = limit


class InvalidBlobReferenceError(BlobStoreError):
    """Raised when a reference does not point inside the store."""


class BlobStore(ABC):
    """Abstract blob store."""

    @abstractmethod
    def limit_for(self, kind: BlobKind) -> int:
        """Return the maximum size in bytes accepted for a kind."""
        ...

    @abstractmethod
    async def store(self, data: bytes, filename: str, kind: BlobKind) -> str:
        """Store a blob.

        Args:
            data: File content.
            filename: Original client file name, used for the extension.
            kind: Blob kind.

        Returns:
            Opaque reference for the stored blob.

        Raises:
            BlobTooLargeError: If data exceeds the limit for kind.
        """
        ...

    @abstractmethod
    def resolve(self, reference: str) -> str:
        """Return a client-facing URL for a stored reference.

        Raises:
            InvalidBlobReferenceError: If the reference is malformed.
        """
        ...

    @abstractmethod
    async def delete(self, reference: str) -> None:
        """Remove a stored blob if it exists."""
        ...
