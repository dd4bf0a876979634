"""Shared file I/O helpers."""

from .files import absolute_path, file_sha256, stable_path_key
from .walk import iter_files, resolve_link

__all__ = ["absolute_path", "file_sha256", "iter_files", "resolve_link", "stable_path_key"]
