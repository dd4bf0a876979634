"""Upload transport boundary."""

from .base import Uploader
from .transport import HttpUploader
from .pipe import stream_through_pipe

__all__ = ["HttpUploader", "Uploader", "stream_through_pipe"]
