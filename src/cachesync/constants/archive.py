"""Archive layout constants."""

from __future__ import annotations

# Both names are stored without the leading slash tar strips on write.
METADATA_ENTRY_NAME: str = "tmp/archive_info.json"
HEADER_ENTRY_NAME: str = "tmp/cache-info.json"

DEFAULT_CACHE_INFO_PATH: str = "/tmp/cache-info.json"
DEFAULT_ARCHIVE_PATH: str = "/tmp/cache-archive.tar"

# Fixed gzip header timestamp so two passes over the same tree are byte-identical.
GZIP_MTIME: int = 0
GZIP_MAGIC: bytes = b"\x1f\x8b"
