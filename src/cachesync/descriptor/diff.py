"""Classification of cache paths between two descriptors."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import get_args

from cachesync.constants.fingerprint import IGNORE_CHANGES_MARKER
from cachesync.paths import is_excluded
from cachesync.types import Descriptor, PathStatus, Pattern

logger = logging.getLogger(__name__)

PATH_STATUSES: tuple[PathStatus, ...] = get_args(PathStatus)


@dataclass(frozen=True)
class DiffResult:
    """Disjoint, sorted path sets produced by :func:`compare`."""

    added: tuple[str, ...] = ()
    added_ignored: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    removed_ignored: tuple[str, ...] = ()
    changed: tuple[str, ...] = ()
    matching: tuple[str, ...] = ()

    def has_changes(self) -> bool:
        """Return True when the previous cache no longer reflects the tracked paths."""
        return bool(self.removed or self.changed or self.added)

    def paths(self, status: PathStatus) -> tuple[str, ...]:
        """Return the paths classified as *status*."""
        return getattr(self, status)


def classify(
    key: str,
    previous: Descriptor,
    current: Descriptor,
    *,
    ignore_patterns: Sequence[Pattern] = (),
    root: Path | None = None,
) -> PathStatus:
    """Return the status of a single key present in at least one descriptor."""
    if key in previous and key in current:
        before, after = previous[key], current[key]
        if before == after or IGNORE_CHANGES_MARKER in (before, after):
            return "matching"
        return "changed"

    if key in current:
        if current[key] == IGNORE_CHANGES_MARKER or is_excluded(key, ignore_patterns, root):
            return "added_ignored"
        return "added"

    if previous[key] == IGNORE_CHANGES_MARKER or is_excluded(key, ignore_patterns, root):
        return "removed_ignored"
    return "removed"


def compare(
    previous: Descriptor | None,
    current: Descriptor,
    *,
    ignore_patterns: Sequence[Pattern] = (),
    root: Path | None = None,
) -> DiffResult:
    """Classify every key of both descriptors in a single pass."""
    previous = previous or {}
    buckets: dict[PathStatus, list[str]] = {status: [] for status in PATH_STATUSES}

    for key in sorted(previous.keys() | current.keys()):
        status = classify(key, previous, current, ignore_patterns=ignore_patterns, root=root)
        buckets[status].append(key)

    return DiffResult(**{status: tuple(paths) for status, paths in buckets.items()})


def log_diff(result: DiffResult, *, debug: bool = False) -> None:
    """Log a summary of *result*; individual paths are listed in debug mode."""

    def _log_paths(paths: tuple[str, ...]) -> None:
        if debug:
            for path in paths:
                logger.debug("- %s", path)

    if result.has_changes():
        logger.warning("Previous cache is invalid, new cache will be generated:")
    logger.warning("%d files need to be removed", len(result.removed))
    _log_paths(result.removed)
    logger.warning("%d files have changed", len(result.changed))
    _log_paths(result.changed)
    logger.warning("%d files added", len(result.added))
    _log_paths(result.added)
    logger.debug("%d ignored files removed", len(result.removed_ignored))
    _log_paths(result.removed_ignored)
    logger.debug("%d files did not change", len(result.matching))
    _log_paths(result.matching)
    logger.debug("%d ignored files added", len(result.added_ignored))
    _log_paths(result.added_ignored)
