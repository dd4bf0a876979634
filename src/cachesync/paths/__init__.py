"""Include and ignore list handling."""

from .patterns import compile_pattern, interleave, is_excluded, matches, parse_ignore_list
from .include import normalize_indicator_by_path, parse_include_list

__all__ = [
    "compile_pattern",
    "interleave",
    "is_excluded",
    "matches",
    "normalize_indicator_by_path",
    "parse_ignore_list",
    "parse_include_list",
]
