from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path


@dataclass
class DoctorResult:
    ok: bool
    notes: list[str]


def _doctor() -> DoctorResult:
    notes: list[str] = []
    ok = True

    ffmpeg = shutil.which("ffmpeg")
    if ffmpeg:
        notes.append(f"ffmpeg: OK ({ffmpeg})")
    else:
        ok = False
        notes.append("ffmpeg: MISSING (needed to run the generated filter chains)")

    notes.append(f"python: {sys.version.split()[0]}")
    notes.append(f"platform: {sys.platform}")

    return DoctorResult(ok=ok, notes=notes)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="chunk-audio",
        add_help=True,
        formatter_class=argparse.RawTextHelpFormatter,
        description="chunk-audio — per-asset ffmpeg audio filter chains for chunked renders\n",
    )

    p.add_argument("--version", action="store_true", help="Print version and exit.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log computed plans and pads.")

    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("doctor", help="Check that ffmpeg is available.")

    b = sub.add_parser("build", help="Build filter fragments for a YAML/JSON file of placements.")
    b.add_argument("input", help="Path to placements (.yaml/.yml/.json)")
    # SUPPRESS keeps a top-level -v from being reset by the subcommand default.
    b.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Log computed plans and pads.")
    b.add_argument("--config", default=None, help="Render config JSON (default: ~/.config/chunk-audio/config.json)")
    b.add_argument("--sample-rate", type=int, default=None, dest="sample_rate", help="Override the sample rate")
    b.add_argument(
        "--inline-pads",
        action="store_true",
        dest="inline_pads",
        help="Also emit each fragment with its pads spliced in (filter_script).",
    )
    b.add_argument("--out", default=None, help="Write the JSON report here instead of stdout")

    return p


def _run_build(args: argparse.Namespace) -> None:
    from dataclasses import replace

    from chunk_audio.audio.filter_graph import FilterGraphBuilder
    from chunk_audio.io.placements import build_report, load_placements, save_report_json
    from chunk_audio.util.config import load_config

    try:
        cfg = load_config(Path(args.config).expanduser() if args.config else None)
        if args.sample_rate is not None:
            cfg = replace(cfg, sample_rate=int(args.sample_rate))
        placements = load_placements(Path(args.input).expanduser())
    except (OSError, ValueError) as e:
        raise SystemExit(f"ERROR: {e}")

    report = build_report(placements, FilterGraphBuilder(cfg), inline_pads=args.inline_pads)

    if args.out:
        out = save_report_json(Path(args.out).expanduser(), report)
        print(f"wrote: {out}")
    else:
        print(json.dumps(report, indent=2, sort_keys=True))


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if getattr(args, "version", False):
        try:
            from importlib.metadata import version

            v = version("chunk-audio")
        except Exception:
            v = "0.0.0"
        print(f"chunk-audio {v}")
        return

    if args.cmd == "doctor":
        res = _doctor()
        status = "OK" if res.ok else "MISSING_DEPS"
        print(f"chunk-audio doctor: {status}")
        for n in res.notes:
            print(f"- {n}")
        if not res.ok:
            print("\nLinux (Debian/Ubuntu): sudo apt-get install ffmpeg")
            print("macOS: brew install ffmpeg")
        return

    if args.cmd == "build":
        _run_build(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
