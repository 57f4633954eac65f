"""Artifact writer: payload A, payload B, then the trailer.

The first payload is measured before anything reaches the sink, so a size
error aborts the pack with the sink untouched. The number of bytes copied
from the first input is checked against the measured size, since that is
the value recorded in the trailer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from ..logging import get_logger
from ..reporting import TaskStatus, get_reporter
from ..utils.io import copy_stream
from .constants import DEFAULT_CHUNK_SIZE
from .errors import contract_violation
from .measure import measure, remaining
from .trailer import ByteSink, encode_trailer, write_trailer

__all__ = ["WriteResult", "write_artifact"]


@dataclass(slots=True)
class WriteResult:
    name_a: bytes
    name_b: bytes
    size_a: int
    size_b: int
    trailer_size: int

    @property
    def total_size(self) -> int:
        return self.size_a + self.size_b + self.trailer_size


def _copy_payload(
    task_id: str,
    label: str,
    src: BinaryIO,
    sink: ByteSink,
    expected: int,
    chunk_size: int,
) -> int:
    rep = get_reporter()
    rep.start_task(task_id, label, total=expected)
    try:
        copied = copy_stream(
            src,
            sink,
            chunk_size,
            on_chunk=lambda n: rep.advance(task_id, n),
        )
    except Exception:
        rep.end_task(task_id, TaskStatus.FAILED)
        raise
    rep.end_task(task_id, bytes=copied, planned=expected)
    return copied


def write_artifact(
    sink: ByteSink,
    first: BinaryIO,
    second: BinaryIO,
    name_a: bytes,
    name_b: bytes,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> WriteResult:
    """Write both payloads and the trailer to ``sink``.

    ``name_a``/``name_b`` must already be normalized base names.
    """
    logger = get_logger()
    size_a = measure(first)
    # Validated up front so a bad name cannot leave a trailer-less artifact.
    planned_trailer = len(encode_trailer(name_a, name_b, size_a))
    expected_b = max(remaining(second), 0)
    logger.debug(
        "payload sizes: a=%d b=%d trailer=%d", size_a, expected_b, planned_trailer
    )

    copied_a = _copy_payload(
        "write.payload.a", "First payload", first, sink, size_a, chunk_size
    )
    if copied_a != size_a:
        raise contract_violation(
            "First payload size changed while copying",
            {"measured": size_a, "copied": copied_a},
        )
    size_b = _copy_payload(
        "write.payload.b", "Second payload", second, sink, expected_b, chunk_size
    )
    trailer_written = write_trailer(sink, name_a, name_b, size_a)
    return WriteResult(
        name_a=name_a,
        name_b=name_b,
        size_a=size_a,
        size_b=size_b,
        trailer_size=trailer_written,
    )
