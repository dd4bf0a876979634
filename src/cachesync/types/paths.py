"""Frozen dataclasses for include/ignore specifications."""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PathEntry:
    """A cached path and the path whose fingerprint gates its validity."""

    path: str
    indicator: str


@dataclass(frozen=True)
class Pattern:
    """A compiled ignore rule; ``negated`` patterns re-include earlier removals."""

    raw: str
    glob: str
    negated: bool = False
    regex: re.Pattern[str] | None = field(default=None, compare=False, repr=False)
