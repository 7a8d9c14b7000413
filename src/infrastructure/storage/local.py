# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Blob store writing uploads to a local directory.

Files are written to ``<root>/<kind>/<timestamp>-<random><ext>``. The
reference is the path relative to root, e.g.
``submissions/1717171717171-482193847.pdf``, and is served under the
configured public URL prefix.

Disk I/O runs in the default executor so the event loop is not blocked.
"""

import asyncio
import logging
import secrets
import time
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from src.infrastructure.storage.base import (
    BlobKind,
    BlobStore,
    BlobTooLargeError,
    InvalidBlobReferenceError,
)

if TYPE_CHECKING:
    from src.core.config.settings import StorageSettings

logger = logging.getLogger(__name__)

# Extensions longer than this, or not alphanumeric, are dropped from the stored name
MAX_EXTENSION_LENGTH = 16


class LocalBlobStore(BlobStore):
    """Filesystem-backed blob store.

    Args:
        root: Directory to write files into. Created on first use.
        public_url: URL prefix the root directory is served under.
        limits: Maximum size in bytes per blob kind.
    """

    def __init__(
        self,
        root: str | Path,
        public_url: str,
        limits: dict[BlobKind, int],
    ) -> None:
        self.root = Path(root)
        self.public_url = public_url.rstrip("/")
        self._limits = dict(limits)

    @classmethod
    def from_settings(cls, settings: "StorageSettings") -> "LocalBlobStore":
        """Create a store from StorageSettings."""
        return cls(
            root=settings.root,
            public_url=settings.public_url,
            limits={
                BlobKind.SUBMISSION: settings.submission_max_bytes,
                BlobKind.MATERIAL: settings.material_max_bytes,
            },
        )

    def limit_for(self, kind: BlobKind) -> int:
        return self._limits[kind]

    async def store(self, data: bytes, filename: str, kind: BlobKind) -> str:
        limit = self.limit_for(kind)
        if len(data) > limit:
            raise BlobTooLargeError(kind, len(data), limit)

        reference = f"{kind.value}/{self._unique_name(filename)}"
        path = self.root / reference

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write, path, data)

        logger.info("Stored blob: reference=%s, size=%d", reference, len(data))
        return reference

    def resolve(self, reference: str) -> str:
        self._check_reference(reference)
        return f"{self.public_url}/{reference}"

    async def delete(self, reference: str) -> None:
        self._check_reference(reference)
        path = self.root / reference
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, lambda: path.unlink(missing_ok=True))

    @staticmethod
    def _unique_name(filename: str) -> str:
        suffix = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
        if len(suffix) > MAX_EXTENSION_LENGTH or not suffix[1:].isalnum():
            suffix = ""
        stamp = int(time.time() * 1000)
        return f"{stamp}-{secrets.randbelow(10**9)}{suffix}"

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    @staticmethod
    def _check_reference(reference: str) -> None:
        parts = PurePosixPath(reference).parts
        if (
            not reference
            or reference.startswith("/")
            or "\\" in reference
            or ".." in parts
            or len(parts) != 2
            or parts[0] not in {kind.value for kind in BlobKind}
        ):
            raise InvalidBlobReferenceError(f"Invalid blob reference: {reference!r}")
