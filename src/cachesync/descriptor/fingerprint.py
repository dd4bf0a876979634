"""Per-path fingerprints and the current cache descriptor."""

from __future__ import annotations

import hashlib
import logging
from enum import StrEnum
from pathlib import Path

from cachesync.constants.fingerprint import (
    IGNORE_CHANGES_MARKER,
    METHOD_FILE_CONTENT_HASH,
    METHOD_FILE_MTIME_ALIAS,
    METHOD_FILE_MTIME_AND_SIZE,
)
from cachesync.exceptions import ConfigError, FingerprintComputeError
from cachesync.io import file_sha256, iter_files, resolve_link, stable_path_key
from cachesync.types import Descriptor, IndicatorMapping

logger = logging.getLogger(__name__)


class FingerprintMethod(StrEnum):
    """Algorithm used to summarize an indicator path."""

    FILE_CONTENT_HASH = METHOD_FILE_CONTENT_HASH
    FILE_MTIME_AND_SIZE = METHOD_FILE_MTIME_AND_SIZE

    @classmethod
    def parse(cls, value: str) -> FingerprintMethod:
        """Resolve a configured method id, accepting the legacy ``file-mtime`` alias."""
        normalized = value.strip().lower()
        if normalized == METHOD_FILE_MTIME_ALIAS:
            return cls.FILE_MTIME_AND_SIZE
        try:
            return cls(normalized)
        except ValueError as exc:
            valid = sorted(method.value for method in cls)
            raise ConfigError(f"fingerprint_method must be one of {valid}, got {value!r}") from exc


def fingerprint(path: Path, method: FingerprintMethod) -> str:
    """Return the fingerprint of a file or, recursively, of a directory."""
    real = resolve_link(path)
    if real.is_dir():
        return _directory_fingerprint(path, method)
    return _file_fingerprint(path, method)


def _file_fingerprint(path: Path, method: FingerprintMethod) -> str:
    try:
        if method is FingerprintMethod.FILE_CONTENT_HASH:
            return file_sha256(path)
        stat = path.stat()
    except OSError as exc:
        raise FingerprintComputeError(str(path), str(exc)) from exc
    return f"{stat.st_mtime_ns}-{stat.st_size}"


def _directory_fingerprint(path: Path, method: FingerprintMethod) -> str:
    """Digest sorted relative paths together with each file's own fingerprint."""
    digest = hashlib.sha256()
    for file_path in iter_files(path):
        relative = file_path.relative_to(path).as_posix()
        digest.update(relative.encode("utf-8"))
        digest.update(b"\0")
        digest.update(_file_fingerprint(file_path, method).encode("ascii"))
        digest.update(b"\n")
    return digest.hexdigest()


def cache_descriptor(indicator_by_path: IndicatorMapping, method: FingerprintMethod, root: Path) -> Descriptor:
    """Build the current descriptor, keyed by stable cache keys.

    An indicator shared by many cached paths is fingerprinted once.
    """
    root = root.resolve()
    by_indicator: dict[str, str] = {}
    descriptor: Descriptor = {}

    for path, indicator in indicator_by_path.items():
        key = stable_path_key(Path(path), root)
        if indicator == IGNORE_CHANGES_MARKER:
            descriptor[key] = IGNORE_CHANGES_MARKER
            continue
        if indicator not in by_indicator:
            by_indicator[indicator] = fingerprint(Path(indicator), method)
        descriptor[key] = by_indicator[indicator]

    logger.debug("Fingerprinted %d indicator(s) for %d path(s) using %s", len(by_indicator), len(descriptor), method)
    return dict(sorted(descriptor.items()))
