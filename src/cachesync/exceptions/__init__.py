"""Shared exception hierarchy for cachesync."""

from __future__ import annotations

from .archive import ArchiveCloseError, ArchiveStateError, ArchiveWriteError, UploadError
from .base import CacheSyncError
from .config import ConfigError
from .descriptor import DescriptorReadError, FingerprintComputeError
from .paths import InvalidPatternError, PathNotFoundError, SpecParseError, UnresolvableLinkError

__all__ = [
    "ArchiveCloseError",
    "ArchiveStateError",
    "ArchiveWriteError",
    "CacheSyncError",
    "ConfigError",
    "DescriptorReadError",
    "FingerprintComputeError",
    "InvalidPatternError",
    "PathNotFoundError",
    "SpecParseError",
    "UnresolvableLinkError",
    "UploadError",
]
