"""End-to-end cache push orchestration.

``push_cache`` is the single entry point: it decides whether the previous
cache is still valid and, if not, builds and hands off a new archive.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from cachesync.archive import entry_name, measure_archive, stack_version_data, write_archive
from cachesync.config import CacheSyncConfig
from cachesync.descriptor import DiffResult, cache_descriptor, compare, load_descriptor, log_diff
from cachesync.exceptions import ArchiveWriteError, ConfigError
from cachesync.paths import interleave, normalize_indicator_by_path, parse_ignore_list, parse_include_list
from cachesync.types import Descriptor, PushStatus
from cachesync.upload import Uploader, stream_through_pipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PushResult:
    """Outcome of one :func:`push_cache` run."""

    status: PushStatus
    descriptor: Descriptor
    diff: DiffResult | None = None
    archive_size: int | None = None
    archive_path: Path | None = None
    entry_count: int = 0


@dataclass(frozen=True)
class _ArchiveJob:
    paths: tuple[Path, ...]
    descriptor: Descriptor
    metadata: bytes
    compress: bool
    entry_mtime: int
    header_name: str


def push_cache(config: CacheSyncConfig, *, root: Path, uploader: Uploader | None = None) -> PushResult:
    """Sync the cache for *root*; upload only when the tracked paths changed."""
    started_at = time.perf_counter()
    root = root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Root does not exist or is not a directory: {root}")
    if config.pipe and uploader is None:
        raise ConfigError("Piped upload requires an upload URL")

    step_started_at = time.perf_counter()
    logger.info("Cleaning paths")
    include = parse_include_list(config.paths)
    patterns = parse_ignore_list(config.ignore_paths)
    if not include:
        logger.warning("No path to cache, skip caching...")
        return PushResult(status="skipped", descriptor={})

    indicator_by_path = normalize_indicator_by_path(include, root)
    indicator_by_path = interleave(indicator_by_path, patterns, root)
    logger.info("Done in %.2fs", time.perf_counter() - step_started_at)
    if not indicator_by_path:
        logger.warning("Every cached path is ignored; an empty cache will be written")

    step_started_at = time.perf_counter()
    logger.info("Checking previous cache status")
    previous = load_descriptor(config.cache_info_path)
    current = cache_descriptor(indicator_by_path, config.fingerprint_method, root)
    logger.info("Done in %.2fs", time.perf_counter() - step_started_at)

    diff: DiffResult | None = None
    if previous is not None:
        logger.info("Checking for file changes")
        diff = compare(previous, current, ignore_patterns=patterns, root=root)
        log_diff(diff, debug=config.debug)
        if not diff.has_changes():
            logger.info("No file changes found, previous cache is still valid")
            logger.info("Total time: %.2fs", time.perf_counter() - started_at)
            return PushResult(status="up_to_date", descriptor=current, diff=diff)

    job = _ArchiveJob(
        paths=tuple(Path(path) for path in indicator_by_path),
        descriptor=current,
        metadata=stack_version_data(config.stack_id),
        compress=config.compress_archive,
        entry_mtime=int(time.time()),
        header_name=entry_name(config.cache_info_path),
    )

    if config.pipe:
        assert uploader is not None
        result = _push_piped(job, uploader, diff)
    else:
        result = _push_file(job, config.archive_path, uploader, diff)

    logger.info("Total time: %.2fs", time.perf_counter() - started_at)
    return result


def _push_file(job: _ArchiveJob, archive_path: Path, uploader: Uploader | None, diff: DiffResult | None) -> PushResult:
    try:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        handle = archive_path.open("wb")
    except OSError as exc:
        raise ArchiveWriteError(str(archive_path), str(exc)) from exc
    with handle:
        entry_count = _write(job, handle)
    size = archive_path.stat().st_size

    if uploader is None:
        logger.info("Cache archive written to %s (%d bytes), no upload URL configured", archive_path, size)
        status: PushStatus = "archived"
    else:
        step_started_at = time.perf_counter()
        logger.info("Uploading cache archive")
        uploader.upload_file(archive_path)
        logger.info("Done in %.2fs", time.perf_counter() - step_started_at)
        status = "uploaded"

    return PushResult(
        status=status,
        descriptor=job.descriptor,
        diff=diff,
        archive_size=size,
        archive_path=archive_path,
        entry_count=entry_count,
    )


def _push_piped(job: _ArchiveJob, uploader: Uploader, diff: DiffResult | None) -> PushResult:
    # The dry pass must finish before streaming starts: the transport needs the length up front.
    size = measure_archive(
        paths=job.paths,
        descriptor=job.descriptor,
        metadata=job.metadata,
        compress=job.compress,
        entry_mtime=job.entry_mtime,
        header_name=job.header_name,
    )
    entry_counts: list[int] = []

    step_started_at = time.perf_counter()
    logger.info("Uploading cache archive")
    stream_through_pipe(
        lambda handle: entry_counts.append(_write(job, handle)),
        lambda reader: uploader.upload_stream(reader, size),
    )
    logger.info("Done in %.2fs", time.perf_counter() - step_started_at)

    return PushResult(
        status="uploaded",
        descriptor=job.descriptor,
        diff=diff,
        archive_size=size,
        entry_count=entry_counts[0] if entry_counts else 0,
    )


def _write(job: _ArchiveJob, handle: BinaryIO) -> int:
    return write_archive(
        handle,
        paths=job.paths,
        descriptor=job.descriptor,
        metadata=job.metadata,
        compress=job.compress,
        entry_mtime=job.entry_mtime,
        header_name=job.header_name,
    )
