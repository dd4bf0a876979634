"""Fingerprint method identifiers and hashing constants."""

from __future__ import annotations

FILE_HASH_CHUNK_SIZE: int = 65536

METHOD_FILE_CONTENT_HASH: str = "file-content-hash"
METHOD_FILE_MTIME_AND_SIZE: str = "file-mtime-and-size"
# Older configs used the shorter name.
METHOD_FILE_MTIME_ALIAS: str = "file-mtime"

DEFAULT_FINGERPRINT_METHOD: str = METHOD_FILE_CONTENT_HASH

# Indicator and fingerprint value for paths cached without change tracking.
IGNORE_CHANGES_MARKER: str = "-"
