"""Path utilities (safe resolution)."""

from __future__ import annotations
import os
from pathlib import Path

from ..packing.errors import E_UNSAFE_NAME, io_error

__all__ = ["safe_file_path"]


def safe_file_path(base_dir: Path, name: bytes) -> Path:
    """Resolve a recorded base name to a path inside ``base_dir``."""
    text = os.fsdecode(name)
    if text in ("", ".", ".."):
        raise io_error(
            E_UNSAFE_NAME,
            f"Recorded file name {text!r} cannot be used as an output file",
            {"name": text},
        )
    base_dir = base_dir.resolve()
    resolved = (base_dir / text).resolve()
    try:
        resolved.relative_to(base_dir)
    except ValueError as exc:
        raise io_error(
            E_UNSAFE_NAME,
            f"Recorded file name {text!r} escapes the output directory",
            {"name": text, "directory": str(base_dir)},
        ) from exc
    return resolved
