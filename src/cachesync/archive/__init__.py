"""Cache archive writing and reading."""

from .reader import read_archive_metadata, read_descriptor_from_archive
from .sinks import CountingSink, Sink
from .stack import stack_version_data
from .writer import ArchiveState, ArchiveWriter, entry_name, measure_archive, walk, write_archive

__all__ = [
    "ArchiveState",
    "ArchiveWriter",
    "CountingSink",
    "Sink",
    "entry_name",
    "measure_archive",
    "read_archive_metadata",
    "read_descriptor_from_archive",
    "stack_version_data",
    "walk",
    "write_archive",
]
