"""Root exception for cachesync."""

from __future__ import annotations


class CacheSyncError(Exception):
    """Base class for all cachesync errors."""
