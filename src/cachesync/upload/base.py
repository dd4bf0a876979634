"""Upload collaborator contract."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol


class Uploader(Protocol):
    """Transport for a finished archive file or a stream of known length."""

    def upload_file(self, path: Path) -> None: ...

    def upload_stream(self, reader: BinaryIO, size: int) -> None: ...
