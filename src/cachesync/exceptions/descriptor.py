"""Descriptor fingerprinting and persistence exceptions."""

from __future__ import annotations

from cachesync.exceptions.base import CacheSyncError


class DescriptorReadError(CacheSyncError):
    """Raised when a persisted descriptor is missing or not a valid mapping."""


class FingerprintComputeError(CacheSyncError, OSError):
    """Raised when a file cannot be read while computing its fingerprint."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to fingerprint {path}: {reason}")
        self.path = path
