"""CLI tests."""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from slidestream.cli import build_parser, cmd_parse, cmd_replay, main
from slidestream.logging_utils import read_events

MARKUP = (
    "<PRESENTATION>"
    '<SECTION layout="left"><H1>Intro</H1><IMG query="mountain sunrise" /></SECTION>'
    "<SECTION><BULLETS><DIV><H3>One</H3></DIV></BULLETS></SECTION>"
    "<SECTION><H2>Truncated"
)


class MockArgs:
    """Mock argparse.Namespace for testing."""
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = Path(tempfile.mkdtemp())
        self.markup_path = self.temp_dir / "deck.xml"
        self.markup_path.write_text(MARKUP, encoding="utf-8")

    def _run(self, func, args) -> tuple:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            result = func(args)
        return result, buffer.getvalue()

    def test_parse_to_stdout(self) -> None:
        args = MockArgs(markup=str(self.markup_path), config=None, output=None, no_finalize=False)
        result, out = self._run(cmd_parse, args)
        self.assertEqual(result, 0)
        slides = json.loads(out)
        self.assertEqual(len(slides), 3)
        self.assertEqual(slides[0]["layoutType"], "left")
        self.assertEqual(slides[0]["rootImage"]["query"], "mountain sunrise")
        self.assertEqual(slides[1]["layoutType"], "bullets")

    def test_parse_no_finalize_skips_open_slide(self) -> None:
        args = MockArgs(markup=str(self.markup_path), config=None, output=None, no_finalize=True)
        result, out = self._run(cmd_parse, args)
        self.assertEqual(result, 0)
        self.assertEqual(len(json.loads(out)), 2)

    def test_parse_to_file(self) -> None:
        output = self.temp_dir / "out" / "slides.json"
        args = MockArgs(markup=str(self.markup_path), config=None, output=str(output), no_finalize=False)
        result, _ = self._run(cmd_parse, args)
        self.assertEqual(result, 0)
        self.assertEqual(len(json.loads(output.read_text(encoding="utf-8"))), 3)

    def test_parse_missing_markup(self) -> None:
        args = MockArgs(markup="/nonexistent/deck.xml", config=None, output=None, no_finalize=False)
        result, _ = self._run(cmd_parse, args)
        self.assertEqual(result, 1)

    def test_parse_missing_config(self) -> None:
        args = MockArgs(
            markup=str(self.markup_path), config="/nonexistent/config.json", output=None, no_finalize=False
        )
        result, _ = self._run(cmd_parse, args)
        self.assertEqual(result, 1)

    def test_parse_invalid_utf8(self) -> None:
        bad_path = self.temp_dir / "bad.xml"
        bad_path.write_bytes(b"<SECTION>\xff</SECTION>")
        args = MockArgs(markup=str(bad_path), config=None, output=None, no_finalize=False)
        result, out = self._run(cmd_parse, args)
        self.assertEqual(result, 1)
        self.assertIn("ERROR", out)

    def test_replay_writes_artifacts(self) -> None:
        runs_dir = self.temp_dir / "runs"
        args = MockArgs(
            markup=str(self.markup_path),
            config=None,
            chunk_size=5,
            runs_dir=str(runs_dir),
            run_id="test_replay",
        )
        result, out = self._run(cmd_replay, args)
        self.assertEqual(result, 0)
        run_dir = runs_dir / "test_replay"
        slides = json.loads((run_dir / "slides.json").read_text(encoding="utf-8"))
        self.assertEqual(len(slides), 3)
        events = read_events(run_dir / "run_log.jsonl")
        self.assertEqual(events[0]["event_type"], "REPLAY_START")
        self.assertEqual(events[-1]["event_type"], "REPLAY_DONE")
        self.assertEqual(events[-1]["payload"]["progression"], [0, 1, 2])
        self.assertIn("FINALIZE", [event["event_type"] for event in events])
        self.assertIn("0 -> 1 -> 2", out)

    def test_replay_rejects_bad_chunk_size(self) -> None:
        args = MockArgs(
            markup=str(self.markup_path),
            config=None,
            chunk_size=0,
            runs_dir=str(self.temp_dir / "runs"),
            run_id=None,
        )
        result, _ = self._run(cmd_replay, args)
        self.assertEqual(result, 1)

    def test_parser_structure(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["parse", "deck.xml"])
        self.assertEqual(args.command, "parse")
        self.assertFalse(args.no_finalize)

        args = parser.parse_args(["replay", "deck.xml", "--chunk-size", "16"])
        self.assertEqual(args.command, "replay")
        self.assertEqual(args.chunk_size, 16)
        self.assertEqual(args.runs_dir, "runs")

    def test_main_dispatches(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            result = main(["parse", str(self.markup_path), "--no-finalize"])
        self.assertEqual(result, 0)
        self.assertEqual(len(json.loads(buffer.getvalue())), 2)


if __name__ == "__main__":
    unittest.main()
