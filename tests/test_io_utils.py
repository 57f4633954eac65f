import io
from pathlib import Path

import pytest

from stl2png.packing.errors import ArtifactIOError, E_UNSAFE_NAME
from stl2png.utils.io import atomic_output, copy_stream
from stl2png.utils.paths import safe_file_path


def test_copy_stream_chunks_and_limit():
    src = io.BytesIO(b"0123456789")
    sink = io.BytesIO()
    seen: list[int] = []
    assert copy_stream(src, sink, 3, on_chunk=seen.append, limit=7) == 7
    assert sink.getvalue() == b"0123456"
    assert seen == [3, 3, 1]
    assert src.read() == b"789"


def test_copy_stream_rejects_bad_chunk_size():
    with pytest.raises(ValueError):
        copy_stream(io.BytesIO(b"x"), io.BytesIO(), 0)


def test_atomic_output_cleans_up_on_failure(tmp_path: Path):
    target = tmp_path / "out.bin"
    with pytest.raises(RuntimeError):
        with atomic_output(target) as f:
            f.write(b"partial")
            raise RuntimeError("abort")
    assert not target.exists()
    assert list(tmp_path.iterdir()) == []


def test_atomic_output_replaces_on_success(tmp_path: Path):
    target = tmp_path / "out.bin"
    target.write_bytes(b"old")
    with atomic_output(target, force=True) as f:
        f.write(b"new")
    assert target.read_bytes() == b"new"
    assert list(tmp_path.iterdir()) == [target]


def test_safe_file_path(tmp_path: Path):
    assert safe_file_path(tmp_path, b"img.png") == tmp_path.resolve() / "img.png"
    for bad in (b"", b".", b".."):
        with pytest.raises(ArtifactIOError) as ei:
            safe_file_path(tmp_path, bad)
        assert ei.value.code == E_UNSAFE_NAME
