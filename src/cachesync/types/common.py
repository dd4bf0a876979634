"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

IndicatorMapping: TypeAlias = dict[str, str]
Descriptor: TypeAlias = dict[str, str]

PathStatus: TypeAlias = Literal["added", "added_ignored", "removed", "removed_ignored", "changed", "matching"]
PushStatus: TypeAlias = Literal["skipped", "up_to_date", "uploaded", "archived"]
