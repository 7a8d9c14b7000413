# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Storage for uploaded submission files and course materials."""

from src.infrastructure.storage.base import (
    BlobKind,
    BlobStore,
    BlobStoreError,
    BlobTooLargeError,
    InvalidBlobReferenceError,
)
from src.infrastructure.storage.local import LocalBlobStore

__all__ = [
    "BlobKind",
    "BlobStore",
    "BlobStoreError",
    "BlobTooLargeError",
    "InvalidBlobReferenceError",
    "LocalBlobStore",
]
