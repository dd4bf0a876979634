"""Persisted descriptor (cache info) parsing and serialization.

There is no standalone write path: the serialized descriptor is embedded as
the trailing entry of every archive, and the next run reads it back from the
location the archive was restored to.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from cachesync.exceptions import DescriptorReadError
from cachesync.types import Descriptor

logger = logging.getLogger(__name__)


def serialize_descriptor(descriptor: Descriptor) -> bytes:
    """Return the canonical UTF-8 JSON encoding of *descriptor*."""
    return json.dumps(descriptor, sort_keys=True, ensure_ascii=False, indent=2).encode("utf-8")


def parse_descriptor(data: bytes) -> Descriptor:
    """Parse canonical descriptor bytes, validating the mapping shape."""
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise DescriptorReadError(f"Cache descriptor is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DescriptorReadError("Cache descriptor must be a JSON object")

    for key, value in payload.items():
        if not isinstance(value, str):
            raise DescriptorReadError(f"Cache descriptor value for {key!r} must be a string")
    return payload


def read_descriptor(path: Path) -> Descriptor:
    """Read a persisted descriptor, raising ``DescriptorReadError`` on any failure."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DescriptorReadError(f"Cannot read cache descriptor {path}: {exc}") from exc

    try:
        return parse_descriptor(data)
    except DescriptorReadError as exc:
        raise DescriptorReadError(f"{path}: {exc}") from exc


def load_descriptor(path: Path) -> Descriptor | None:
    """Return the previous descriptor, or ``None`` when there is no usable one.

    A missing file and a corrupt file are treated the same way: both force a
    full rebuild.
    """
    if not path.is_file():
        logger.info("No previous cache info found at %s", path)
        return None

    try:
        descriptor = read_descriptor(path)
    except DescriptorReadError as exc:
        logger.warning("Ignoring unreadable previous cache info: %s", exc)
        return None

    logger.info("Previous cache info found at %s (%d paths)", path, len(descriptor))
    return descriptor
