"""Producer/consumer streaming through an OS pipe."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from typing import BinaryIO, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def stream_through_pipe(produce: Callable[[BinaryIO], None], consume: Callable[[BinaryIO], T]) -> T:
    """Run *produce* on a worker thread writing into a pipe that *consume* reads.

    The pipe's buffer provides backpressure. A producer failure wins over the
    consumer's own error, since a truncated stream is usually what broke the
    consumer. The exception is a broken pipe: that only means the consumer
    stopped reading, so the consumer's error is the real one.
    """
    read_fd, write_fd = os.pipe()
    errors: list[Exception] = []

    def _produce() -> None:
        try:
            with os.fdopen(write_fd, "wb") as handle:
                produce(handle)
        except Exception as exc:
            logger.debug("Archive writer thread failed: %s", exc)
            errors.append(exc)

    thread = threading.Thread(target=_produce, name="cachesync-archive-writer", daemon=True)
    thread.start()
    try:
        with os.fdopen(read_fd, "rb") as reader:
            result = consume(reader)
    except Exception:
        # The read end is closed here, so a blocked producer fails fast.
        thread.join()
        if errors and not _is_broken_pipe(errors[0]):
            raise errors[0]
        raise
    thread.join()

    if errors:
        raise errors[0]
    return result


def _is_broken_pipe(exc: BaseException) -> bool:
    current: BaseException | None = exc
    while current is not None:
        if isinstance(current, BrokenPipeError):
            return True
        current = current.__cause__
    return False
