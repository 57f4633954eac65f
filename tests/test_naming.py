import logging
from pathlib import Path

from stl2png.packing.naming import normalize


def test_bare_name_is_unchanged():
    assert normalize("img.png") == b"img.png"
    assert normalize("x" * 255) == b"x" * 255


def test_directory_prefix_is_stripped():
    assert normalize("/home/user/img.png") == b"img.png"
    assert normalize("relative/dir/model.stl") == b"model.stl"
    assert normalize("./model.stl") == b"model.stl"


def test_accepts_pathlike_and_bytes():
    assert normalize(Path("a/b/c.png")) == b"c.png"
    assert normalize(b"a/b/c.png") == b"c.png"


def test_trailing_separator_gives_empty_name(caplog):
    with caplog.at_level(logging.WARNING, logger="stl2png"):
        assert normalize("some/dir/") == b""
    assert not caplog.records


def test_escaped_separator_is_not_special():
    # Known limitation: the backslash does not protect the slash.
    assert normalize("/home/user/my\\/file\\/name.png") == b"name.png"


def test_long_name_keeps_trailing_bytes(caplog):
    name = "p" * 10 + "q" * 250 + ".png"
    assert len(name) == 264
    with caplog.at_level(logging.WARNING, logger="stl2png"):
        result = normalize("dir/" + name)
    assert len(result) == 255
    assert result == name.encode()[-255:]
    assert result.endswith(b".png")
    # Nine of the ten leading "p"s are dropped.
    assert result == b"p" + b"q" * 250 + b".png"
    assert len(caplog.records) == 1
    msg = caplog.records[0].getMessage()
    assert "W_NAME_TRUNCATED" in msg
    assert "truncated" in msg


def test_exactly_255_bytes_is_not_truncated(caplog):
    name = "n" * 251 + ".stl"
    with caplog.at_level(logging.WARNING, logger="stl2png"):
        assert normalize("/tmp/" + name) == name.encode()
    assert not caplog.records


def test_limit_counts_bytes_not_characters(caplog):
    # 200 two-byte characters = 400 bytes.
    name = "é" * 200
    with caplog.at_level(logging.WARNING, logger="stl2png"):
        result = normalize(name)
    assert len(result) == 255
    assert result == name.encode("utf-8")[-255:]
    assert caplog.records
