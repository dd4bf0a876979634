"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "cachesync.yaml"

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "paths",
        "ignore_paths",
        "fingerprint_method",
        "compress_archive",
        "pipe",
        "cache_api_url",
        "stack_id",
        "cache_info_path",
        "archive_path",
        "debug",
    }
)

UPLOAD_TIMEOUT_SECONDS: int = 300
