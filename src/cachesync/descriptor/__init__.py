"""Descriptor computation, persistence and comparison."""

from .diff import DiffResult, classify, compare, log_diff
from .fingerprint import FingerprintMethod, cache_descriptor, fingerprint
from .store import load_descriptor, parse_descriptor, read_descriptor, serialize_descriptor

__all__ = [
    "DiffResult",
    "FingerprintMethod",
    "cache_descriptor",
    "classify",
    "compare",
    "fingerprint",
    "load_descriptor",
    "log_diff",
    "parse_descriptor",
    "read_descriptor",
    "serialize_descriptor",
]
