"""Configuration loading and normalization for cache sync runs."""

from __future__ import annotations

from cachesync.config.loader import load_config
from cachesync.config.model import CacheSyncConfig

__all__ = ["CacheSyncConfig", "load_config"]
