"""Include and ignore list syntax."""

from __future__ import annotations

INDICATOR_SEPARATOR: str = "->"
NEGATION_PREFIX: str = "!"
