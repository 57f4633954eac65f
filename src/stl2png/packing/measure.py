"""Remaining-size measurement for seekable input streams."""

from __future__ import annotations

import io
from typing import BinaryIO

from .constants import MAX_PAYLOAD_SIZE
from .errors import negative_size, size_overflow

__all__ = ["measure", "remaining"]


def remaining(stream: BinaryIO) -> int:
    """Distance from the current position to the end, without range checks.

    The position is restored before returning, also when seeking fails.
    """
    start = stream.tell()
    try:
        stream.seek(0, io.SEEK_END)
        end = stream.tell()
    finally:
        stream.seek(start, io.SEEK_SET)
    return end - start


def measure(stream: BinaryIO) -> int:
    """Size of the first payload as it will be recorded in the trailer."""
    size = remaining(stream)
    if size < 0:
        raise negative_size(size)
    if size > MAX_PAYLOAD_SIZE:
        raise size_overflow(size, MAX_PAYLOAD_SIZE)
    return size
