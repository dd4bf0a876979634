"""Shared type aliases for cachesync."""

from .common import Descriptor, IndicatorMapping, PathStatus, PushStatus
from .paths import PathEntry, Pattern

__all__ = [
    "Descriptor",
    "IndicatorMapping",
    "PathEntry",
    "PathStatus",
    "Pattern",
    "PushStatus",
]
