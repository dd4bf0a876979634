"""Build environment identity stored as the first archive entry."""

from __future__ import annotations

import json


def stack_version_data(stack_id: str) -> bytes:
    """Return the canonical metadata blob for *stack_id*."""
    payload = {"stack_id": stack_id}
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
