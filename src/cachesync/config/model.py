"""Config data model for cache sync runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cachesync.constants.archive import DEFAULT_ARCHIVE_PATH, DEFAULT_CACHE_INFO_PATH
from cachesync.descriptor.fingerprint import FingerprintMethod


@dataclass(frozen=True)
class CacheSyncConfig:
    """Resolved settings for one cache push."""

    paths: tuple[str, ...] = ()
    ignore_paths: tuple[str, ...] = ()
    fingerprint_method: FingerprintMethod = FingerprintMethod.FILE_CONTENT_HASH
    compress_archive: bool = False
    pipe: bool = False
    cache_api_url: str | None = None
    stack_id: str = ""
    cache_info_path: Path = Path(DEFAULT_CACHE_INFO_PATH)
    archive_path: Path = Path(DEFAULT_ARCHIVE_PATH)
    debug: bool = False

    def summary_lines(self) -> list[str]:
        """Human-readable settings, one per line, for the start-of-run banner."""
        return [
            f"paths: {len(self.paths)} line(s)",
            f"ignore_paths: {len(self.ignore_paths)} line(s)",
            f"fingerprint_method: {self.fingerprint_method}",
            f"compress_archive: {self.compress_archive}",
            f"pipe: {self.pipe}",
            f"cache_api_url: {'<set>' if self.cache_api_url else '<none>'}",
            f"stack_id: {self.stack_id or '<none>'}",
            f"cache_info_path: {self.cache_info_path}",
            f"archive_path: {self.archive_path}",
            f"debug: {self.debug}",
        ]
