"""Include list parsing and normalization.

Include lines take one of these forms::

    path/to/file
    path/to/dir
    path/to/file -> path/to/indicator
    path/to/dir -> -

The indicator is the path whose fingerprint decides whether the cached path
changed. It defaults to the cached path itself; ``-`` caches the path without
ever letting its changes invalidate the cache.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from cachesync.constants.fingerprint import IGNORE_CHANGES_MARKER
from cachesync.constants.paths import INDICATOR_SEPARATOR
from cachesync.exceptions import PathNotFoundError, SpecParseError
from cachesync.io import absolute_path, iter_files, resolve_link
from cachesync.types import IndicatorMapping, PathEntry

logger = logging.getLogger(__name__)


def parse_include_list(lines: Iterable[str]) -> IndicatorMapping:
    """Parse raw include lines into a cached path -> indicator mapping."""
    indicator_by_path: IndicatorMapping = {}
    for entry in _iter_entries(lines):
        indicator_by_path[entry.path] = entry.indicator
    return indicator_by_path


def _iter_entries(lines: Iterable[str]) -> Iterable[PathEntry]:
    for raw in lines:
        line = raw.strip()
        if not line:
            continue

        parts = line.split(INDICATOR_SEPARATOR)
        if len(parts) > 2:
            raise SpecParseError(raw, f"expected at most one '{INDICATOR_SEPARATOR}'")

        path = parts[0].strip()
        if not path:
            logger.debug("Skipping include line without a path: %r", raw)
            continue

        if len(parts) == 1:
            yield PathEntry(path=path, indicator=path)
            continue

        indicator = parts[1].strip()
        if not indicator:
            raise SpecParseError(raw, f"missing indicator after '{INDICATOR_SEPARATOR}'")
        yield PathEntry(path=path, indicator=indicator)


def normalize_indicator_by_path(indicator_by_path: IndicatorMapping, root: Path) -> IndicatorMapping:
    """Resolve every entry to absolute paths and expand directories into files.

    Files found under a cached directory inherit the directory's indicator; a
    path that is its own indicator yields entries that are their own indicator.
    Raises on the first path or indicator that cannot be resolved, so no
    partial mapping ever escapes.
    """
    root = root.resolve()
    normalized: IndicatorMapping = {}

    for raw_path, raw_indicator in indicator_by_path.items():
        path = absolute_path(raw_path, root)
        indicator = _normalize_indicator(raw_path, raw_indicator, root)

        file_count = 0
        for file_path in iter_files(path):
            normalized[str(file_path)] = indicator if indicator is not None else str(file_path)
            file_count += 1

        if file_count == 0:
            logger.warning("Cached path contains no files: %s", path)
        else:
            logger.debug("Expanded %s into %d file(s)", path, file_count)

    return normalized


def _normalize_indicator(raw_path: str, raw_indicator: str, root: Path) -> str | None:
    """Return the absolute indicator, ``-``, or ``None`` when the path is its own indicator."""
    if raw_indicator == IGNORE_CHANGES_MARKER:
        return IGNORE_CHANGES_MARKER
    if raw_indicator == raw_path:
        return None

    indicator = absolute_path(raw_indicator, root)
    real = resolve_link(indicator)
    if not (real.is_file() or real.is_dir()):
        raise PathNotFoundError(str(indicator), reason="not a regular file or directory")
    return str(indicator)
