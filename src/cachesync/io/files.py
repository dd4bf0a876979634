"""File-level helpers for hashing and stable path keys."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from cachesync.constants.fingerprint import FILE_HASH_CHUNK_SIZE


def file_sha256(path: Path) -> str:
    """Return SHA-256 hex digest for a file."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def absolute_path(raw: str, root: Path) -> Path:
    """Expand ``~`` and environment variables, anchor relative paths at *root*."""
    expanded = os.path.expandvars(os.path.expanduser(raw))
    candidate = Path(expanded)
    if not candidate.is_absolute():
        candidate = root / candidate
    return Path(os.path.normpath(candidate))


def stable_path_key(path: Path, root: Path) -> str:
    """Return a deterministic key relative to *root* when possible."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
