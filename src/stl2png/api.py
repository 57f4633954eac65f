"""High-level API: pack, unpack and inspect artifacts.

This is the shell around the trailer core. It owns every file handle: inputs
are opened here, the output goes through :func:`atomic_output`, and core
errors are left to propagate to the caller (the CLI turns them into an exit
status).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO
import os

from .logging import get_logger
from .manifest import build_manifest
from .packing.constants import DEFAULT_CHUNK_SIZE
from .packing.errors import E_OPEN_INPUT, E_OPEN_OUTPUT, E_UNSAFE_NAME, io_error
from .packing.inspector import TrailerInfo, read_trailer_from
from .packing.naming import normalize
from .packing.writer import WriteResult, write_artifact
from .reporting import get_reporter
from .utils.io import atomic_output, check_overwrite, copy_stream
from .utils.paths import safe_file_path

__all__ = [
    "PackOptions",
    "PackResult",
    "UnpackResult",
    "pack_files",
    "unpack_artifact",
    "inspect_artifact",
]


@dataclass(slots=True)
class PackOptions:
    first_path: Path
    second_path: Path
    output_path: Path
    manifest_path: Path | None = None
    force: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass(slots=True)
class PackResult:
    output_file: Path
    bytes_written: int
    layout: WriteResult


@dataclass(slots=True)
class UnpackResult:
    first_file: Path
    second_file: Path
    trailer: TrailerInfo


def _open_input(path: Path) -> BinaryIO:
    try:
        return open(path, "rb")
    except OSError as exc:
        raise io_error(
            E_OPEN_INPUT,
            f"Failed to open file {str(path)!r} for reading: {exc.strerror or exc}",
            {"path": str(path)},
        ) from exc


def pack_files(options: PackOptions) -> PackResult:
    logger = get_logger()
    rep = get_reporter()
    with _open_input(options.first_path) as first, _open_input(
        options.second_path
    ) as second:
        name_a = normalize(os.fspath(options.first_path))
        name_b = normalize(os.fspath(options.second_path))
        logger.debug("base names: a=%r b=%r", name_a, name_b)
        with atomic_output(options.output_path, force=options.force) as out:
            layout = write_artifact(
                out,
                first,
                second,
                name_a,
                name_b,
                chunk_size=options.chunk_size,
            )
    bytes_written = layout.total_size
    if options.manifest_path is not None:
        build_manifest(
            layout,
            options.output_path,
            options.manifest_path,
            chunk_size=options.chunk_size,
        )
        rep.status(
            "Manifest summary: file="
            + f"{options.manifest_path.name} artifact={options.output_path.name}"
        )
    logger.info(
        "Packed %s (%d bytes)", options.output_path.name, bytes_written
    )
    rep.status(
        "Pack summary: file="
        + f"{options.output_path.name} bytes={bytes_written} size_a={layout.size_a} "
        + f"size_b={layout.size_b} trailer={layout.trailer_size}"
    )
    return PackResult(
        output_file=options.output_path,
        bytes_written=bytes_written,
        layout=layout,
    )


def inspect_artifact(path: str | Path) -> TrailerInfo:
    with _open_input(Path(path)) as f:
        return read_trailer_from(f)


def _extract(
    src: BinaryIO,
    start: int,
    size: int,
    target: Path,
    *,
    force: bool,
    chunk_size: int,
) -> None:
    src.seek(start)
    with atomic_output(target, force=force) as out:
        copy_stream(src, out, chunk_size, limit=size)


def unpack_artifact(
    artifact: str | Path,
    out_dir: str | Path,
    *,
    force: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> UnpackResult:
    """Split ``artifact`` into its two payloads, named as recorded."""
    rep = get_reporter()
    out_dir = Path(out_dir)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise io_error(
            E_OPEN_OUTPUT,
            f"Cannot use {str(out_dir)!r} as output directory: {exc.strerror or exc}",
            {"path": str(out_dir)},
        ) from exc
    with _open_input(Path(artifact)) as f:
        info = read_trailer_from(f)
        first = safe_file_path(out_dir, info.name_a)
        second = safe_file_path(out_dir, info.name_b)
        if first == second:
            raise io_error(
                E_UNSAFE_NAME,
                f"Both payloads are recorded under the same name {first.name!r}",
                {"name": first.name},
            )
        # Both targets are checked before either payload is written.
        check_overwrite(first, force=force)
        check_overwrite(second, force=force)
        _extract(
            f, 0, info.size_a, first, force=force, chunk_size=chunk_size
        )
        _extract(
            f,
            info.size_a,
            info.size_b,
            second,
            force=force,
            chunk_size=chunk_size,
        )
    rep.status(
        "Unpack summary: "
        + f"first={first.name} size_a={info.size_a} second={second.name} size_b={info.size_b}"
    )
    return UnpackResult(first_file=first, second_file=second, trailer=info)
