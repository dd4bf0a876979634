"""Exceptions raised while parsing and normalizing include/ignore lists."""

from __future__ import annotations

from cachesync.exceptions.base import CacheSyncError


class SpecParseError(CacheSyncError, ValueError):
    """Raised when an include or ignore line is malformed."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"Invalid line {line!r}: {reason}")
        self.line = line


class PathNotFoundError(CacheSyncError, FileNotFoundError):
    """Raised when a cached path or indicator cannot be resolved on disk."""

    def __init__(self, path: str, reason: str = "does not exist") -> None:
        super().__init__(f"Path {path}: {reason}")
        self.path = path


class UnresolvableLinkError(CacheSyncError, OSError):
    """Raised on a dangling symlink or a symlink cycle."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot resolve link {path}: {reason}")
        self.path = path


class InvalidPatternError(CacheSyncError, ValueError):
    """Raised when an ignore pattern has unbalanced glob syntax."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid ignore pattern {pattern!r}: {reason}")
        self.pattern = pattern
