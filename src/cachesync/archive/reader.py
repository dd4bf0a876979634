"""Reading metadata and cache info back out of a cache archive."""

from __future__ import annotations

import tarfile
from pathlib import Path

from cachesync.constants.archive import HEADER_ENTRY_NAME
from cachesync.descriptor.store import parse_descriptor
from cachesync.exceptions import DescriptorReadError
from cachesync.types import Descriptor


def read_archive_metadata(archive_path: Path) -> bytes:
    """Return the first entry's bytes without reading past it."""
    try:
        with tarfile.open(archive_path, mode="r|*") as tar:
            member = tar.next()
            if member is None:
                raise DescriptorReadError(f"Archive {archive_path} is empty")
            handle = tar.extractfile(member)
            if handle is None:
                raise DescriptorReadError(f"First entry of {archive_path} is not a regular file")
            return handle.read()
    except (OSError, tarfile.TarError) as exc:
        raise DescriptorReadError(f"Cannot read archive {archive_path}: {exc}") from exc


def read_descriptor_from_archive(archive_path: Path, name: str = HEADER_ENTRY_NAME) -> Descriptor:
    """Return the descriptor stored in the archive's cache-info entry."""
    try:
        with tarfile.open(archive_path, mode="r:*") as tar:
            handle = tar.extractfile(name)
            if handle is None:
                raise DescriptorReadError(f"Entry {name} of {archive_path} is not a regular file")
            data = handle.read()
    except KeyError as exc:
        raise DescriptorReadError(f"Archive {archive_path} has no {name} entry") from exc
    except (OSError, tarfile.TarError) as exc:
        raise DescriptorReadError(f"Cannot read archive {archive_path}: {exc}") from exc
    return parse_descriptor(data)
