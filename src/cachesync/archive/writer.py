"""Tar archive assembly for cache uploads.

Layout, in order:

1. the stack metadata entry, first so a later run can read it without
   unpacking the rest of the archive,
2. one regular-file entry per selected file,
3. the serialized descriptor (cache info), last so it describes exactly what
   was archived.

The same :func:`write_archive` sequence drives both the real pass and the dry
pass that measures a streamed upload. The two passes only produce identical
bytes if nothing touches the cached paths between them; that is assumed, not
checked.
"""

from __future__ import annotations

import gzip
import io
import logging
import stat
import tarfile
import time
from collections.abc import Iterable, Iterator
from contextlib import suppress
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import BinaryIO

from cachesync.archive.sinks import CountingSink, Sink
from cachesync.constants.archive import GZIP_MTIME, HEADER_ENTRY_NAME, METADATA_ENTRY_NAME
from cachesync.descriptor.store import serialize_descriptor
from cachesync.exceptions import ArchiveCloseError, ArchiveStateError, FingerprintComputeError
from cachesync.io import iter_files
from cachesync.types import Descriptor

logger = logging.getLogger(__name__)

GENERATED_ENTRY_MODE: int = 0o644


class ArchiveState(Enum):
    """Lifecycle of an :class:`ArchiveWriter`; each step may run only once, in order."""

    OPEN = 1
    METADATA_WRITTEN = 2
    PATHS_WRITTEN = 3
    HEADER_WRITTEN = 4
    CLOSED = 5


def entry_name(path: Path | str) -> str:
    """Return the archive member name tar would store for an absolute *path*."""
    return PurePosixPath(path).as_posix().lstrip("/")


def walk(paths: Iterable[Path]) -> Iterator[tuple[str, Path]]:
    """Yield ``(member name, file)`` for every file under *paths*, without duplicates.

    Member names are the absolute file paths without the leading slash, so the
    archive restores in place when extracted at ``/``.
    """
    seen: set[str] = set()
    for path in paths:
        for file_path in iter_files(path):
            name = entry_name(file_path)
            if name in seen:
                continue
            seen.add(name)
            yield name, file_path


class ArchiveWriter:
    """Sequential tar writer with an optional deterministic gzip layer."""

    def __init__(self, destination: BinaryIO | Sink, *, compress: bool = False, entry_mtime: int = 0) -> None:
        self._destination = destination
        self._gzip = (
            gzip.GzipFile(fileobj=destination, mode="wb", mtime=GZIP_MTIME, filename="")  # type: ignore[arg-type]
            if compress
            else None
        )
        stream = self._gzip if self._gzip is not None else destination
        self._tar = tarfile.open(fileobj=stream, mode="w|", format=tarfile.PAX_FORMAT)  # type: ignore[arg-type]
        self._entry_mtime = entry_mtime
        self._state = ArchiveState.OPEN
        self.entry_count = 0

    @property
    def compressed(self) -> bool:
        return self._gzip is not None

    @property
    def state(self) -> ArchiveState:
        return self._state

    def write_metadata(self, data: bytes, name: str = METADATA_ENTRY_NAME) -> None:
        """Write the metadata blob as the first entry."""
        self._advance(ArchiveState.OPEN, ArchiveState.METADATA_WRITTEN)
        self._write_bytes(name, data)

    def write_paths(self, paths: Iterable[Path], *, dry_run: bool = False) -> int:
        """Write one entry per file under *paths*; returns the number of files written.

        A dry run must target a :class:`CountingSink`. Content is still read so
        the measured length matches the real pass exactly.
        """
        if dry_run and not isinstance(self._destination, CountingSink):
            raise ArchiveStateError("A dry run must write into a CountingSink")
        self._advance(ArchiveState.METADATA_WRITTEN, ArchiveState.PATHS_WRITTEN)

        written = 0
        for name, file_path in walk(paths):
            self._write_file(name, file_path)
            written += 1

        if not dry_run:
            logger.info("Archived %d file(s)", written)
        return written

    def write_header(self, descriptor: Descriptor, name: str = HEADER_ENTRY_NAME) -> None:
        """Write the serialized descriptor as the final entry."""
        self._advance(ArchiveState.PATHS_WRITTEN, ArchiveState.HEADER_WRITTEN)
        self._write_bytes(name, serialize_descriptor(descriptor))

    def close(self) -> None:
        """Flush and close tar, then gzip, then the destination."""
        if self._state is ArchiveState.CLOSED:
            return
        self._state = ArchiveState.CLOSED
        try:
            self._tar.close()
            if self._gzip is not None:
                self._gzip.close()
            self._destination.close()
        except OSError as exc:
            raise ArchiveCloseError(f"Failed to close archive: {exc}") from exc

    def abort(self) -> None:
        """Best-effort close of every layer after a failed write.

        The partial output is discarded by the caller, so secondary failures
        here must not mask the first error.
        """
        self._state = ArchiveState.CLOSED
        layers = [self._tar, self._gzip, self._destination]
        for layer in layers:
            if layer is None:
                continue
            with suppress(OSError, ValueError):
                layer.close()

    def _advance(self, expected: ArchiveState, target: ArchiveState) -> None:
        if self._state is not expected:
            raise ArchiveStateError(f"Cannot move archive from {self._state.name} to {target.name}")
        self._state = target

    def _write_bytes(self, name: str, data: bytes) -> None:
        info = tarfile.TarInfo(name)
        info.size = len(data)
        info.mode = GENERATED_ENTRY_MODE
        info.mtime = self._entry_mtime
        self._tar.addfile(info, io.BytesIO(data))
        self.entry_count += 1

    def _write_file(self, name: str, path: Path) -> None:
        try:
            file_stat = path.stat()
            info = tarfile.TarInfo(name)
            info.size = file_stat.st_size
            info.mode = stat.S_IMODE(file_stat.st_mode)
            info.mtime = int(file_stat.st_mtime)
            with path.open("rb") as handle:
                self._tar.addfile(info, handle)
        except OSError as exc:
            raise FingerprintComputeError(str(path), f"cannot archive ({exc})") from exc
        self.entry_count += 1


def write_archive(
    destination: BinaryIO | Sink,
    *,
    paths: Iterable[Path],
    descriptor: Descriptor,
    metadata: bytes,
    compress: bool = False,
    dry_run: bool = False,
    entry_mtime: int = 0,
    metadata_name: str = METADATA_ENTRY_NAME,
    header_name: str = HEADER_ENTRY_NAME,
) -> int:
    """Run the full write sequence into *destination* and close it.

    Returns the number of entries written, metadata and header included.
    """
    started_at = time.perf_counter()
    if not dry_run:
        logger.info("Generating cache archive")

    writer = ArchiveWriter(destination, compress=compress, entry_mtime=entry_mtime)
    try:
        writer.write_metadata(metadata, metadata_name)
        writer.write_paths(paths, dry_run=dry_run)
        writer.write_header(descriptor, header_name)
    except Exception:
        writer.abort()
        raise
    writer.close()

    if not dry_run:
        logger.info("Done in %.2fs", time.perf_counter() - started_at)
    return writer.entry_count


def measure_archive(
    *,
    paths: Iterable[Path],
    descriptor: Descriptor,
    metadata: bytes,
    compress: bool = False,
    entry_mtime: int = 0,
    metadata_name: str = METADATA_ENTRY_NAME,
    header_name: str = HEADER_ENTRY_NAME,
) -> int:
    """Return the exact byte length :func:`write_archive` would produce."""
    sink = CountingSink()
    write_archive(
        sink,
        paths=paths,
        descriptor=descriptor,
        metadata=metadata,
        compress=compress,
        dry_run=True,
        entry_mtime=entry_mtime,
        metadata_name=metadata_name,
        header_name=header_name,
    )
    return sink.size
