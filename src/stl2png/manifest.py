"""Manifest generation for packed artifacts.

The manifest is an optional JSON file summarising one artifact: the
recorded names, payload sizes, trailer size and SHA-256 digests of each
payload and of the whole file. It is only written when requested.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, BinaryIO
import hashlib
import json

from .packing.constants import DEFAULT_CHUNK_SIZE
from .packing.writer import WriteResult

__all__ = ["artifact_digests", "manifest_dict", "build_manifest"]


def _hash_range(f: BinaryIO, start: int, length: int, chunk_size: int) -> str:
    h = hashlib.sha256()
    f.seek(start)
    left = length
    while left > 0:
        chunk = f.read(min(chunk_size, left))
        if not chunk:
            break
        h.update(chunk)
        left -= len(chunk)
    return h.hexdigest()


def artifact_digests(
    path: Path, result: WriteResult, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> dict[str, str]:
    with path.open("rb") as f:
        return {
            "payload_a": _hash_range(f, 0, result.size_a, chunk_size),
            "payload_b": _hash_range(
                f, result.size_a, result.size_b, chunk_size
            ),
            "artifact": _hash_range(f, 0, result.total_size, chunk_size),
        }


def manifest_dict(
    result: WriteResult,
    *,
    artifact_name: str,
    digests: dict[str, str] | None = None,
) -> dict[str, Any]:
    digests = digests or {}
    return {
        "version": 1,
        "artifact": artifact_name,
        "file_size": result.total_size,
        "trailer_size": result.trailer_size,
        "payloads": [
            {
                "name": result.name_a.decode("utf-8", errors="replace"),
                "offset": 0,
                "size": result.size_a,
                "sha256": digests.get("payload_a"),
            },
            {
                "name": result.name_b.decode("utf-8", errors="replace"),
                "offset": result.size_a,
                "size": result.size_b,
                "sha256": digests.get("payload_b"),
            },
        ],
        "sha256": digests.get("artifact"),
    }


def build_manifest(
    result: WriteResult,
    artifact_path: Path,
    output_path: Path,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = manifest_dict(
        result,
        artifact_name=artifact_path.name,
        digests=artifact_digests(artifact_path, result, chunk_size),
    )
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)
        f.write("\n")
    return output_path
