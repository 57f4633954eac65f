"""IO helpers: chunked stream copy and atomic output files."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Optional

from ..packing.constants import DEFAULT_CHUNK_SIZE
from ..packing.errors import E_OPEN_OUTPUT, E_OUTPUT_EXISTS, io_error
from ..packing.trailer import ByteSink

__all__ = ["copy_stream", "check_overwrite", "atomic_output"]


def copy_stream(
    src: BinaryIO,
    sink: ByteSink,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    on_chunk: Optional[Callable[[int], None]] = None,
    limit: Optional[int] = None,
) -> int:
    """Copy from the current position of ``src`` into ``sink``.

    Copies to end of stream, or at most ``limit`` bytes. Returns the number
    of bytes copied.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    copied = 0
    while limit is None or copied < limit:
        want = chunk_size if limit is None else min(chunk_size, limit - copied)
        chunk = src.read(want)
        if not chunk:
            break
        sink.write(chunk)
        copied += len(chunk)
        if on_chunk is not None:
            on_chunk(len(chunk))
    return copied


def check_overwrite(path: Path, *, force: bool = False) -> None:
    if path.exists() and not force:
        raise io_error(
            E_OUTPUT_EXISTS,
            f"Output file {str(path)!r} already exists (use --force to overwrite)",
            {"path": str(path)},
        )


@contextmanager
def atomic_output(path: Path, *, force: bool = False) -> Iterator[BinaryIO]:
    """Open ``<path>.tmp`` for writing and move it over ``path`` on success.

    On any exception the temporary file is removed and ``path`` is left
    untouched.
    """
    check_overwrite(path, force=force)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        f = tmp_path.open("wb")
    except OSError as exc:
        raise io_error(
            E_OPEN_OUTPUT,
            f"Failed to open file {str(path)!r} for writing: {exc.strerror or exc}",
            {"path": str(path)},
        ) from exc
    try:
        with f:
            yield f
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
