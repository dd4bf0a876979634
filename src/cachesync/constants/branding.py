"""User-facing CLI text."""

from __future__ import annotations

CLI_DESCRIPTION: str = (
    "Keep a build cache archive in sync with the working tree.\n\n"
    "Include lines: path, dir, path -> indicator, path -> -\n"
    "Ignore lines: pattern, !pattern"
)
