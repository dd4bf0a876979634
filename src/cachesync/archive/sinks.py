"""Byte destinations for archive streams."""

from __future__ import annotations

import io
from typing import Protocol


class Sink(Protocol):
    """Minimal writable byte destination accepted by the archive writer."""

    def write(self, data: bytes, /) -> int: ...

    def close(self) -> None: ...


class CountingSink(io.RawIOBase):
    """Discard written bytes, keeping only their total length.

    Used for the dry pass that sizes a streamed upload before the real pass
    runs.
    """

    def __init__(self) -> None:
        super().__init__()
        self.size = 0

    def writable(self) -> bool:
        return True

    def write(self, data: bytes, /) -> int:  # type: ignore[override]
        length = memoryview(data).nbytes
        self.size += length
        return length
