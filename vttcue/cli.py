"""
vttcue/cli.py

Command line dump of a WebVTT file: one line per cue, or JSON with geometry and spans.
"""

import argparse
import json
import logging
import sys
from enum import Enum
from typing import List, Optional

from .config import IngestConfig
from .errors import InvalidHeader
from .ingest import WebVTTIngester
from .models import CueResult, Span


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vttcue",
        description="Decode WebVTT cues: timing, geometry and styled text.",
    )
    parser.add_argument("input", type=str, help="Path to a .vtt file.")
    parser.add_argument("--json", action="store_true", help="Print cues as a JSON array.")
    parser.add_argument(
        "--no-styles",
        action="store_true",
        help="Ignore ::cue rules declared in STYLE blocks.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Diagnostics level for malformed input (default: WARNING).",
    )
    return parser


def format_timestamp(us: int) -> str:
    ms = us // 1000
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def _plain(value):
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, tuple):
        return list(value)
    return value


def span_to_dict(span: Span) -> dict:
    return {"start": span.start, "end": span.end, "kind": span.kind.value, "value": _plain(span.value)}


def cue_to_dict(cue: CueResult) -> dict:
    return {
        "id": cue.cue_id,
        "start": format_timestamp(cue.start_time_us),
        "end": format_timestamp(cue.end_time_us),
        "text": cue.text.text,
        "text_alignment": _plain(cue.text_alignment),
        "line": cue.line,
        "line_type": _plain(cue.line_type),
        "line_anchor": _plain(cue.line_anchor),
        "position": cue.position,
        "position_anchor": _plain(cue.position_anchor),
        "size": cue.size,
        "vertical": _plain(cue.vertical_type),
        "spans": [span_to_dict(s) for s in cue.text.spans],
    }


def format_cue_line(cue: CueResult) -> str:
    line = "auto" if cue.line is None else f"{cue.line:g}"
    text = cue.text.text.replace("\n", "\\n")
    return (f"{format_timestamp(cue.start_time_us)} --> {format_timestamp(cue.end_time_us)} "
            f"line={line} position={cue.position:g} size={cue.size:g} | {text}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="[%(levelname)s] %(name)s: %(message)s")

    config = IngestConfig.from_env()
    if args.no_styles:
        config.parse_style_blocks = False

    try:
        track = WebVTTIngester(config).parse(args.input)
    except (OSError, InvalidHeader) as e:
        print(f"[ERROR] Failed to load {args.input}: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([cue_to_dict(c) for c in track.cues], ensure_ascii=False, indent=2))
    else:
        for cue in track.cues:
            print(format_cue_line(cue))
    return 0


if __name__ == "__main__":
    sys.exit(main())
