"""Ignore patterns and their interleaving with the include mapping."""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from cachesync.constants.paths import NEGATION_PREFIX
from cachesync.exceptions import InvalidPatternError, SpecParseError
from cachesync.io import stable_path_key
from cachesync.types import IndicatorMapping, Pattern

logger = logging.getLogger(__name__)


def parse_ignore_list(lines: Iterable[str]) -> list[Pattern]:
    """Parse raw ignore lines, in order, into compiled patterns."""
    patterns: list[Pattern] = []
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        if line == NEGATION_PREFIX:
            raise SpecParseError(raw, "negation without a pattern")
        patterns.append(compile_pattern(line))
    return patterns


def compile_pattern(raw: str) -> Pattern:
    """Compile one ignore line; a leading ``!`` marks a re-include."""
    negated = raw.startswith(NEGATION_PREFIX)
    glob = raw[len(NEGATION_PREFIX) :].strip() if negated else raw.strip()
    if not glob:
        raise SpecParseError(raw, "empty pattern")

    glob = os.path.expandvars(os.path.expanduser(glob))
    _validate_glob(raw, glob)
    alternatives = _expand_braces(glob)
    regex = re.compile("|".join(f"(?:{fnmatch.translate(option)})" for option in alternatives))
    return Pattern(raw=raw, glob=glob, negated=negated, regex=regex)


def matches(pattern: Pattern, path: str, root: Path | None = None) -> bool:
    """Return True when *pattern* matches *path* as a root-relative key or absolute path."""
    assert pattern.regex is not None
    return any(pattern.regex.match(candidate) for candidate in _match_candidates(path, root))


def is_excluded(path: str, patterns: Sequence[Pattern], root: Path | None = None) -> bool:
    """Return the verdict of the last pattern matching *path* (not excluded if none does)."""
    excluded = False
    for pattern in patterns:
        if matches(pattern, path, root):
            excluded = not pattern.negated
    return excluded


def interleave(
    indicator_by_path: IndicatorMapping,
    patterns: Sequence[Pattern],
    root: Path | None = None,
) -> IndicatorMapping:
    """Apply ignore patterns in order to the include mapping.

    A plain pattern drops every surviving entry it matches. A negated pattern
    restores entries that an earlier pattern dropped; it never adds a path
    that was not removed first. The input mapping is left untouched.
    """
    selected = set(indicator_by_path)
    removed: set[str] = set()

    for pattern in patterns:
        if pattern.negated:
            restored = {path for path in removed if matches(pattern, path, root)}
            removed -= restored
            selected |= restored
            logger.debug("Pattern %r restored %d path(s)", pattern.raw, len(restored))
        else:
            dropped = {path for path in selected if matches(pattern, path, root)}
            selected -= dropped
            removed |= dropped
            logger.debug("Pattern %r removed %d path(s)", pattern.raw, len(dropped))

    return {path: indicator for path, indicator in indicator_by_path.items() if path in selected}


def _match_candidates(path: str, root: Path | None) -> tuple[str, ...]:
    if root is None:
        return (path,)
    absolute = Path(path) if os.path.isabs(path) else root / path
    return (stable_path_key(absolute, root), absolute.as_posix())


def _validate_glob(raw: str, glob: str) -> None:
    """Reject unbalanced ``[...]`` classes and ``{...}`` alternations."""
    depth = 0
    index = 0
    while index < len(glob):
        char = glob[index]
        if char == "[":
            start = index + 1
            if glob[start : start + 1] == "!":
                start += 1
            if glob[start : start + 1] == "]":
                start += 1
            close = glob.find("]", start)
            if close == -1:
                raise InvalidPatternError(raw, "unclosed '['")
            index = close + 1
            continue
        if char == "]":
            raise InvalidPatternError(raw, "unmatched ']'")
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                raise InvalidPatternError(raw, "unmatched '}'")
        index += 1

    if depth:
        raise InvalidPatternError(raw, "unclosed '{'")


def _expand_braces(glob: str) -> list[str]:
    """Expand ``{a,b}`` alternations into plain globs."""
    start = glob.find("{")
    if start == -1:
        return [glob]

    depth = 0
    options: list[str] = []
    option_start = start + 1
    end = start
    for index in range(start, len(glob)):
        char = glob[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                options.append(glob[option_start:index])
                end = index
                break
        elif char == "," and depth == 1:
            options.append(glob[option_start:index])
            option_start = index + 1

    prefix, suffix = glob[:start], glob[end + 1 :]
    return [expanded for option in options for expanded in _expand_braces(prefix + option + suffix)]
