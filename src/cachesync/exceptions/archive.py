"""Archive writing and upload exceptions."""

from __future__ import annotations

from cachesync.exceptions.base import CacheSyncError


class ArchiveStateError(CacheSyncError, RuntimeError):
    """Raised when archive steps are called out of order."""


class ArchiveCloseError(CacheSyncError, OSError):
    """Raised when flushing or closing the archive layers fails."""


class UploadError(CacheSyncError):
    """Raised when the archive could not be transferred."""


class ArchiveWriteError(CacheSyncError, OSError):
    """Raised when the local archive file cannot be created."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot write archive {path}: {reason}")
        self.path = path
        self.reason = reason
