import json
from pathlib import Path

import pytest

from stl2png.cli import build_parser, main


def _inputs(make_file):
    png = make_file("img.png", b"\x41\x42\x43")
    stl = make_file("model.stl", b"\x53\x54")
    return png, stl


def test_parser_requires_command():
    with pytest.raises(SystemExit) as ei:
        build_parser().parse_args([])
    assert ei.value.code == 2


def test_pack_usage_error(capsys):
    with pytest.raises(SystemExit) as ei:
        main(["pack", "only-one-arg"])
    assert ei.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_pack_inspect_unpack(tmp_path: Path, make_file, capsys):
    png, stl = _inputs(make_file)
    out = tmp_path / "combined.bin"
    assert main(["pack", str(png), str(stl), str(out)]) == 0
    assert out.read_bytes().endswith(b"\x07\x09\x00\x00\x00\x03")
    err = capsys.readouterr().err
    assert "Pack summary:" in err

    assert main(["inspect", str(out), "--json"]) == 0
    info = json.loads(capsys.readouterr().out)
    assert info["name_a"] == "img.png"
    assert info["size_b"] == 2

    assert main(["inspect", str(out)]) == 0
    text = capsys.readouterr().out
    assert "first:  img.png (3 bytes)" in text
    assert "second: model.stl (2 bytes)" in text

    dest = tmp_path / "split"
    assert main(["unpack", str(out), str(dest)]) == 0
    assert (dest / "img.png").read_bytes() == b"ABC"
    assert (dest / "model.stl").read_bytes() == b"ST"


def test_existing_output_exits_nonzero(tmp_path: Path, make_file, capsys):
    png, stl = _inputs(make_file)
    out = tmp_path / "combined.bin"
    out.write_bytes(b"keep")
    assert main(["pack", str(png), str(stl), str(out)]) == 1
    assert "E_OUTPUT_EXISTS" in capsys.readouterr().err
    assert out.read_bytes() == b"keep"
    assert main(["pack", str(png), str(stl), str(out), "--force"]) == 0
    assert out.read_bytes() != b"keep"


def test_missing_input_exits_nonzero(tmp_path: Path, make_file, capsys):
    _, stl = _inputs(make_file)
    out = tmp_path / "combined.bin"
    rc = main(["pack", str(tmp_path / "missing.png"), str(stl), str(out)])
    assert rc == 1
    assert "E_OPEN_INPUT" in capsys.readouterr().err
    assert not out.exists()


def test_inspect_garbage_exits_nonzero(tmp_path: Path, capsys):
    bad = tmp_path / "bad.bin"
    bad.write_bytes(b"\x01")
    assert main(["inspect", str(bad)]) == 1
    assert "E_TRAILER_TRUNCATED" in capsys.readouterr().err


def test_json_reporter_emits_summary(tmp_path: Path, make_file, capsys):
    png, stl = _inputs(make_file)
    out = tmp_path / "combined.bin"
    assert main(["-r", "json", "pack", str(png), str(stl), str(out)]) == 0
    events = [
        json.loads(line)
        for line in capsys.readouterr().out.splitlines()
        if line.strip()
    ]
    summaries = [e for e in events if e["event"] == "summary"]
    assert summaries and summaries[-1]["summary_type"] == "pack"
    assert summaries[-1]["bytes"] == "27"
    ends = [e for e in events if e["event"] == "task_end"]
    assert [e["id"] for e in ends] == ["write.payload.a", "write.payload.b"]


def test_config_file_supplies_defaults(tmp_path: Path, make_file, capsys):
    png, stl = _inputs(make_file)
    out = tmp_path / "combined.bin"
    cfg = tmp_path / "stl2png.yaml"
    cfg.write_text("reporter: json\nmanifest: true\nchunk_size: 1\n")
    assert main(["-c", str(cfg), "pack", str(png), str(stl), str(out)]) == 0
    assert (tmp_path / "combined.bin.manifest.json").exists()
    assert '"event": "summary"' in capsys.readouterr().out


def test_bad_config_exits_nonzero(tmp_path: Path, capsys):
    cfg = tmp_path / "bad.json"
    cfg.write_text('{"colour": "red"}')
    assert main(["-c", str(cfg), "inspect", "whatever"]) == 1
    assert "E_CONFIG" in capsys.readouterr().err


def test_unpack_into_a_regular_file_exits_nonzero(
    tmp_path: Path, make_file, capsys
):
    png, stl = _inputs(make_file)
    out = tmp_path / "combined.bin"
    assert main(["pack", str(png), str(stl), str(out)]) == 0
    capsys.readouterr()
    assert main(["unpack", str(out), str(png)]) == 1
    assert "E_OPEN_OUTPUT" in capsys.readouterr().err


def test_commands_run_inside_sections(tmp_path: Path, make_file, capsys):
    png, stl = _inputs(make_file)
    out = tmp_path / "combined.bin"
    assert main(["-r", "json", "pack", str(png), str(stl), str(out)]) == 0
    events = [
        json.loads(line)
        for line in capsys.readouterr().out.splitlines()
        if line.strip()
    ]
    assert events[0] == {"event": "section", "title": "Pack"}

    assert main(["unpack", str(out), str(tmp_path / "split")]) == 0
    assert "[Unpack]" in capsys.readouterr().err


def test_json_reporter_with_inspect_json(tmp_path: Path, make_file, capsys):
    png, stl = _inputs(make_file)
    out = tmp_path / "combined.bin"
    assert main(["pack", str(png), str(stl), str(out)]) == 0
    capsys.readouterr()
    assert main(["-r", "json", "inspect", str(out), "--json"]) == 0
    captured = capsys.readouterr()
    # stdout holds only the document; events go to stderr
    assert json.loads(captured.out)["size_a"] == 3
    events = [
        json.loads(line) for line in captured.err.splitlines() if line.strip()
    ]
    assert {"event": "section", "title": "Inspect"} in events
