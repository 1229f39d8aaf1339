"""CLI entry point for slidestream."""

from __future__ import annotations

import argparse
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .errors import MalformedInputError
from .logging_utils import log_event
from .markup.parser import SlideParser
from .models.config import ParserConfig
from .models.slide import Slide


def _generate_run_id() -> str:
    """Generate a timestamp-based run ID."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("markup", type=str, help="Path to a slide markup file")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to parser config JSON (default: built-in defaults)",
    )


def _load_inputs(args: argparse.Namespace) -> Optional[tuple[ParserConfig, bytes]]:
    markup_path = Path(args.markup)
    if not markup_path.exists():
        print(f"ERROR: Markup file not found: {markup_path}")
        return None
    try:
        config = load_config(Path(args.config) if args.config else None)
    except (FileNotFoundError, ValueError) as exc:
        print(f"ERROR: {exc}")
        return None
    return config, markup_path.read_bytes()


def _slides_json(slides: List[Slide]) -> str:
    return json.dumps([slide.to_dict() for slide in slides], indent=2, ensure_ascii=False)


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse a complete markup file and emit the slides as JSON."""
    inputs = _load_inputs(args)
    if inputs is None:
        return 1
    config, markup = inputs

    parser = SlideParser(config)
    try:
        parser.ingest(markup)
    except MalformedInputError as exc:
        print(f"ERROR: {exc}")
        return 1
    if not args.no_finalize:
        parser.finalize()

    output = _slides_json(parser.all_slides())
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output + "\n", encoding="utf-8")
        print(f"Wrote {len(parser.all_slides())} slides to: {output_path}")
    else:
        print(output)
    return 0


def cmd_replay(args: argparse.Namespace) -> int:
    """Replay a markup file as a cumulative stream and record slide progress."""
    inputs = _load_inputs(args)
    if inputs is None:
        return 1
    config, raw = inputs
    try:
        markup = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        print(f"ERROR: Markup is not valid UTF-8: {exc}")
        return 1
    if args.chunk_size < 1:
        print("ERROR: --chunk-size must be at least 1")
        return 1

    run_id = args.run_id if args.run_id else _generate_run_id()
    run_dir = Path(args.runs_dir) / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    log_path = run_dir / "run_log.jsonl"

    log_event(log_path, "REPLAY_START", {"run_id": run_id, "markup_path": args.markup})

    parser = SlideParser(config, log_path=log_path)
    progression: List[int] = []
    for end in range(args.chunk_size, len(markup) + args.chunk_size, args.chunk_size):
        parser.ingest(markup[:end])
        count = len(parser.all_slides())
        if not progression or progression[-1] != count:
            progression.append(count)
    parser.finalize()

    slides = parser.all_slides()
    slides_path = run_dir / "slides.json"
    slides_path.write_text(_slides_json(slides) + "\n", encoding="utf-8")

    log_event(log_path, "REPLAY_DONE", {
        "run_id": run_id,
        "slides": len(slides),
        "progression": progression,
    })

    print(f"Closed slide progression: {' -> '.join(str(n) for n in progression) or '0'}")
    print(f"Final slides: {len(slides)}")
    print(f"Slides saved to: {slides_path}")
    print(f"Run artifacts in: {run_dir}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="slidestream CLI - streaming slide markup parser")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse a markup file to slides JSON")
    _add_common_args(parse_parser)
    parse_parser.add_argument(
        "--output", type=str, default=None, help="Write JSON here instead of stdout"
    )
    parse_parser.add_argument(
        "--no-finalize",
        action="store_true",
        help="Only report slides whose SECTION was explicitly closed",
    )
    parse_parser.set_defaults(func=cmd_parse)

    # Replay command
    replay_parser = subparsers.add_parser(
        "replay", help="Replay a markup file as a cumulative stream"
    )
    _add_common_args(replay_parser)
    replay_parser.add_argument(
        "--chunk-size", type=int, default=64, help="Characters added per ingest (default: 64)"
    )
    replay_parser.add_argument(
        "--runs-dir", type=str, default="runs", help="Directory for run artifacts (default: runs)"
    )
    replay_parser.add_argument(
        "--run-id", type=str, default=None, help="Run ID (default: auto-generated timestamp)"
    )
    replay_parser.set_defaults(func=cmd_replay)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
