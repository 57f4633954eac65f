"""Trailer decoding and artifact splitting.

Public functions:
- decode_trailer(data) -> TrailerInfo
- read_trailer(path) -> TrailerInfo
- split_artifact(data) -> (payload_a, payload_b, TrailerInfo)

``read_trailer`` only reads the tail of the file, so inspecting a large
artifact does not load its payloads.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Dict, Tuple
import io
import struct

from .constants import TRAILER_FIXED_SIZE
from .errors import E_TRAILER_LAYOUT, E_TRAILER_TRUNCATED, trailer_error

__all__ = [
    "TrailerInfo",
    "decode_trailer",
    "read_trailer",
    "read_trailer_from",
    "split_artifact",
]


@dataclass(slots=True, frozen=True)
class TrailerInfo:
    name_a: bytes
    name_b: bytes
    size_a: int
    total_size: int

    @property
    def trailer_size(self) -> int:
        return len(self.name_a) + len(self.name_b) + TRAILER_FIXED_SIZE

    @property
    def payload_end(self) -> int:
        return self.total_size - self.trailer_size

    @property
    def size_b(self) -> int:
        return self.payload_end - self.size_a

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name_a": self.name_a.decode("utf-8", errors="replace"),
            "name_b": self.name_b.decode("utf-8", errors="replace"),
            "len_a": len(self.name_a),
            "len_b": len(self.name_b),
            "size_a": self.size_a,
            "size_b": self.size_b,
            "trailer_size": self.trailer_size,
            "total_size": self.total_size,
        }


def _parse_fixed(tail: bytes, total_size: int) -> Tuple[int, int, int]:
    len_a, len_b, size_a = struct.unpack(">BBI", tail)
    names_end = total_size - TRAILER_FIXED_SIZE
    if len_a + len_b > names_end:
        raise trailer_error(
            E_TRAILER_LAYOUT,
            "Name lengths exceed the artifact size",
            {"len_a": len_a, "len_b": len_b, "total_size": total_size},
        )
    payload_end = names_end - len_a - len_b
    if size_a > payload_end:
        raise trailer_error(
            E_TRAILER_LAYOUT,
            "Recorded size of the first payload exceeds the payload area",
            {"size_a": size_a, "payload_end": payload_end},
        )
    return len_a, len_b, size_a


def _check_total(total_size: int) -> None:
    if total_size < TRAILER_FIXED_SIZE:
        raise trailer_error(
            E_TRAILER_TRUNCATED,
            f"Artifact is {total_size} bytes; a trailer needs at least {TRAILER_FIXED_SIZE}",
            {"total_size": total_size},
        )


def decode_trailer(data: bytes) -> TrailerInfo:
    total = len(data)
    _check_total(total)
    len_a, len_b, size_a = _parse_fixed(data[-TRAILER_FIXED_SIZE:], total)
    names_end = total - TRAILER_FIXED_SIZE
    names_start = names_end - len_a - len_b
    return TrailerInfo(
        name_a=bytes(data[names_start : names_start + len_a]),
        name_b=bytes(data[names_start + len_a : names_end]),
        size_a=size_a,
        total_size=total,
    )


def read_trailer_from(stream: BinaryIO) -> TrailerInfo:
    stream.seek(0, io.SEEK_END)
    total = stream.tell()
    _check_total(total)
    stream.seek(total - TRAILER_FIXED_SIZE, io.SEEK_SET)
    len_a, len_b, size_a = _parse_fixed(
        stream.read(TRAILER_FIXED_SIZE), total
    )
    stream.seek(total - TRAILER_FIXED_SIZE - len_a - len_b, io.SEEK_SET)
    names = stream.read(len_a + len_b)
    return TrailerInfo(
        name_a=names[:len_a],
        name_b=names[len_a:],
        size_a=size_a,
        total_size=total,
    )


def read_trailer(path: str | Path) -> TrailerInfo:
    with Path(path).open("rb") as f:
        return read_trailer_from(f)


def split_artifact(data: bytes) -> Tuple[bytes, bytes, TrailerInfo]:
    info = decode_trailer(data)
    payload_a = bytes(data[: info.size_a])
    payload_b = bytes(data[info.size_a : info.payload_end])
    return payload_a, payload_b, info
