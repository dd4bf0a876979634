"""Configuration-related exceptions."""

from __future__ import annotations

from cachesync.exceptions.base import CacheSyncError


class ConfigError(CacheSyncError, ValueError):
    """Raised when cache configuration is invalid."""
