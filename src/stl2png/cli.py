"""Command line interface for stl2png."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import PackOptions, inspect_artifact, pack_files, unpack_artifact
from .config import REPORTERS, ToolConfig, load_config
from .logging import configure_logging, step
from .packing.errors import Stl2PngError
from .reporting import (
    PlainReporter,
    create_reporter,
    get_reporter,
    section,
    set_reporter,
    set_verbosity,
)


def _pack_cmd(args: argparse.Namespace, cfg: ToolConfig) -> int:
    manifest_path = args.emit_manifest
    if manifest_path is None and cfg.manifest:
        manifest_path = args.output.with_name(args.output.name + ".manifest.json")
    with section("Pack"):
        step(f"packing {args.first} + {args.second}")
        pack_files(
            PackOptions(
                first_path=args.first,
                second_path=args.second,
                output_path=args.output,
                manifest_path=manifest_path,
                force=args.force or cfg.force,
                chunk_size=cfg.chunk_size,
            )
        )
    return 0


def _unpack_cmd(args: argparse.Namespace, cfg: ToolConfig) -> int:
    with section("Unpack"):
        step(f"unpacking {args.artifact}")
        unpack_artifact(
            args.artifact,
            args.out_dir,
            force=args.force or cfg.force,
            chunk_size=cfg.chunk_size,
        )
    return 0


def _inspect_cmd(args: argparse.Namespace, cfg: ToolConfig) -> int:
    with section("Inspect"):
        info = inspect_artifact(args.artifact)
    if args.json:
        get_reporter().flush()
        print(json.dumps(info.to_dict(), indent=2, sort_keys=True))
        return 0
    d = info.to_dict()
    get_reporter().status(
        "Inspect summary: "
        + " ".join(
            f"{k}={d[k]}"
            for k in ("len_a", "len_b", "size_a", "size_b", "trailer_size")
        )
    )
    print(f"first:  {d['name_a']} ({d['size_a']} bytes)")
    print(f"second: {d['name_b']} ({d['size_b']} bytes)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stl2png",
        description="Combine an image and a 3D model file into one artifact",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=None,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=list(REPORTERS),
        default=None,
        help="Reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    p.add_argument(
        "-c",
        "--config",
        type=Path,
        help="YAML or JSON file with default options",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    pk = sub.add_parser("pack", help="Combine two files into one artifact")
    pk.add_argument("first", type=Path, help="First input (image)")
    pk.add_argument("second", type=Path, help="Second input (3D model)")
    pk.add_argument("output", type=Path, help="Artifact to write")
    pk.add_argument(
        "--emit-manifest",
        dest="emit_manifest",
        type=Path,
        help="Optional path to write a manifest JSON",
    )
    pk.add_argument(
        "-f", "--force", action="store_true", help="Overwrite the output"
    )
    pk.set_defaults(func=_pack_cmd)

    up = sub.add_parser("unpack", help="Split an artifact into its two files")
    up.add_argument("artifact", type=Path)
    up.add_argument("out_dir", type=Path)
    up.add_argument(
        "-f", "--force", action="store_true", help="Overwrite existing files"
    )
    up.set_defaults(func=_unpack_cmd)

    ins = sub.add_parser("inspect", help="Print the trailer of an artifact")
    ins.add_argument("artifact", type=Path)
    ins.add_argument("--json", action="store_true", help="Emit JSON")
    ins.set_defaults(func=_inspect_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = load_config(args.config) if args.config else ToolConfig()
    except Stl2PngError as exc:
        set_reporter(PlainReporter())
        get_reporter().error(str(exc))
        return 1
    verbosity = args.verbose if args.verbose is not None else cfg.verbose
    # The --json document owns stdout; events go to stderr instead.
    event_stream = sys.stderr if getattr(args, "json", False) else None
    set_reporter(
        create_reporter(args.reporter or cfg.reporter, stream=event_stream)
    )
    set_verbosity(verbosity)
    configure_logging(verbosity)
    rep = get_reporter()
    try:
        return args.func(args, cfg)
    except Stl2PngError as exc:
        rep.flush()
        rep.error(f"{exc.code}: {exc.message}", code=exc.code)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
