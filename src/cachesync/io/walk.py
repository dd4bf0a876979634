"""Symlink-aware, deterministic file tree walking.

Every consumer that expands a directory (normalization, fingerprinting and
archiving) goes through :func:`iter_files`, so all of them observe the same
file set in the same order.
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from cachesync.exceptions import FingerprintComputeError, PathNotFoundError, UnresolvableLinkError

logger = logging.getLogger(__name__)


def resolve_link(path: Path) -> Path:
    """Resolve *path* to its real location, failing on dangling links and loops."""
    try:
        return path.resolve(strict=True)
    except FileNotFoundError as exc:
        if path.is_symlink():
            raise UnresolvableLinkError(str(path), "dangling symlink") from exc
        raise PathNotFoundError(str(path)) from exc
    except RuntimeError as exc:
        # Python < 3.13 reports symlink loops as RuntimeError.
        raise UnresolvableLinkError(str(path), "symlink loop") from exc
    except OSError as exc:
        if exc.errno == errno.ELOOP:
            raise UnresolvableLinkError(str(path), "symlink loop") from exc
        raise PathNotFoundError(str(path), reason=str(exc)) from exc


def iter_files(path: Path) -> Iterator[Path]:
    """Yield regular files at or below *path* in sorted order.

    Yielded paths keep the caller's spelling (links are not rewritten to their
    targets) so they stay relative to *path*.
    """
    real = resolve_link(path)
    if real.is_dir():
        yield from _walk_dir(path, real, frozenset())
    elif real.is_file():
        yield path
    else:
        raise PathNotFoundError(str(path), reason="not a regular file or directory")


def _walk_dir(path: Path, real: Path, ancestors: frozenset[Path]) -> Iterator[Path]:
    if real in ancestors:
        raise UnresolvableLinkError(str(path), "symlink loop")
    ancestors = ancestors | {real}

    try:
        names = sorted(os.listdir(path))
    except OSError as exc:
        raise FingerprintComputeError(str(path), f"cannot list directory ({exc})") from exc

    for name in names:
        child = path / name
        child_real = resolve_link(child)
        if child_real.is_dir():
            yield from _walk_dir(child, child_real, ancestors)
        elif child_real.is_file():
            yield child
        else:
            logger.debug("Skipping special file: %s", child)
