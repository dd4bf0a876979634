"""HTTP PUT uploader."""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import BinaryIO

from cachesync.constants.config import UPLOAD_TIMEOUT_SECONDS
from cachesync.exceptions import UploadError

logger = logging.getLogger(__name__)


class HttpUploader:
    """Send the archive body to a single URL with an explicit ``Content-Length``."""

    def __init__(self, url: str, *, timeout: int = UPLOAD_TIMEOUT_SECONDS) -> None:
        self.url = url
        self.timeout = timeout

    def upload_file(self, path: Path) -> None:
        try:
            size = path.stat().st_size
            handle = path.open("rb")
        except OSError as exc:
            raise UploadError(f"Cannot open archive {path}: {exc}") from exc
        with handle:
            self.upload_stream(handle, size)

    def upload_stream(self, reader: BinaryIO, size: int) -> None:
        request = urllib.request.Request(
            self.url,
            data=reader,
            method="PUT",
            headers={"Content-Type": "application/octet-stream", "Content-Length": str(size)},
        )
        logger.info("Uploading %d bytes", size)
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = response.status
        except urllib.error.HTTPError as exc:
            raise UploadError(f"Upload failed with HTTP {exc.code}") from exc
        except (urllib.error.URLError, OSError) as exc:
            raise UploadError(f"Upload failed: {exc}") from exc

        if not 200 <= status < 300:
            raise UploadError(f"Upload failed with HTTP {status}")
