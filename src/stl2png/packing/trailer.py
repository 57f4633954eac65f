"""Trailer encoding.

Layout appended after the two raw payloads::

    name_a | name_b | u8 len(name_a) | u8 len(name_b) | u32be size_a

There is no magic, version or checksum. ``size_b`` is not stored; readers
derive it from the total artifact length.
"""

from __future__ import annotations

import struct
from typing import Protocol

from .constants import MAX_NAME_LENGTH, MAX_PAYLOAD_SIZE, TRAILER_FIXED_SIZE
from .errors import contract_violation

__all__ = [
    "ByteSink",
    "encode_be32",
    "encode_trailer",
    "write_trailer",
    "trailer_size",
]


class ByteSink(Protocol):
    def write(self, data: bytes, /) -> object: ...


def encode_be32(n: int) -> bytes:
    if not 0 <= n <= MAX_PAYLOAD_SIZE:
        raise contract_violation(
            "value does not fit in an unsigned 32-bit field", {"value": n}
        )
    return bytes((n >> (8 * (3 - i))) & 0xFF for i in range(4))


def _check_name(label: str, name: bytes) -> None:
    if len(name) > MAX_NAME_LENGTH:
        raise contract_violation(
            f"{label} exceeds {MAX_NAME_LENGTH} bytes; it must be normalized first",
            {"name": label, "length": len(name)},
        )


def trailer_size(name_a: bytes, name_b: bytes) -> int:
    return len(name_a) + len(name_b) + TRAILER_FIXED_SIZE


def encode_trailer(name_a: bytes, name_b: bytes, size_a: int) -> bytes:
    _check_name("name_a", name_a)
    _check_name("name_b", name_b)
    return b"".join(
        (
            bytes(name_a),
            bytes(name_b),
            struct.pack("BB", len(name_a), len(name_b)),
            encode_be32(size_a),
        )
    )


def write_trailer(
    sink: ByteSink, name_a: bytes, name_b: bytes, size_a: int
) -> int:
    """Append the trailer to ``sink``; returns the number of bytes written.

    The trailer is fully encoded before the first write, so a contract
    violation leaves the sink untouched.
    """
    data = encode_trailer(name_a, name_b, size_a)
    sink.write(data)
    return len(data)
