"""Trailer format constants."""

from __future__ import annotations

PATH_SEPARATOR = b"/"

# Each name length is stored in a single unsigned byte.
MAX_NAME_LENGTH = 0xFF
# size_a is stored as an unsigned 32-bit big-endian integer.
MAX_PAYLOAD_SIZE = 0xFFFFFFFF

NAME_LENGTH_FIELD_SIZE = 1
SIZE_FIELD_SIZE = 4
# len_a + len_b + size_a
TRAILER_FIXED_SIZE = 2 * NAME_LENGTH_FIELD_SIZE + SIZE_FIELD_SIZE

DEFAULT_CHUNK_SIZE = 1024 * 1024

__all__ = [
    "PATH_SEPARATOR",
    "MAX_NAME_LENGTH",
    "MAX_PAYLOAD_SIZE",
    "NAME_LENGTH_FIELD_SIZE",
    "SIZE_FIELD_SIZE",
    "TRAILER_FIXED_SIZE",
    "DEFAULT_CHUNK_SIZE",
]
