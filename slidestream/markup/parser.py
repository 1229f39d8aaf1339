"""Streaming slide markup parser.

The producer pushes markup as it is generated; every ``ingest`` re-derives the
whole state from the buffer, so resending the same cumulative text is harmless
and the result never depends on how the text was chunked.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from ..errors import MalformedInputError
from ..logging_utils import EventLog
from ..models.config import ParserConfig
from ..models.slide import Slide
from .materializer import materialize_slides
from .tokenizer import tokenize
from .tree import build_tree


def _decode(markup: Union[str, bytes]) -> str:
    """Return markup as text, rejecting anything that is not valid UTF-8."""
    if isinstance(markup, bytes):
        try:
            return markup.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f"Markup is not valid UTF-8: {exc}") from exc
    if not isinstance(markup, str):
        raise TypeError(f"Markup must be str or bytes, not {type(markup).__name__}")
    try:
        markup.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise MalformedInputError(f"Markup is not representable as UTF-8: {exc}") from exc
    return markup


class SlideParser:
    """Turn a growing markup stream into closed slides.

    Usage::

        parser = SlideParser()
        for text in cumulative_chunks:
            parser.ingest(text)
            show(parser.all_slides())
        parser.finalize()
    """

    def __init__(
        self, config: Optional[ParserConfig] = None, log_path: Optional[Path] = None
    ) -> None:
        self.config = config or ParserConfig()
        self._log = EventLog(log_path)
        self._buffer = ""
        self._closed: List[Slide] = []
        self._pending: Optional[Slide] = None
        self._open_elements = 0
        self._finalized = False

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def open_elements(self) -> int:
        """Number of elements still waiting for a close tag."""
        return self._open_elements

    def _resolve_buffer(self, text: str) -> str:
        mode = self.config.ingest_mode
        if mode == "cumulative":
            return text
        if mode == "delta":
            return self._buffer + text
        if text.startswith(self._buffer):
            return text
        self._log.emit(
            "NON_CUMULATIVE_INPUT",
            buffer_chars=len(self._buffer),
            input_chars=len(text),
        )
        return self._buffer + text

    def _derive(self, buffer: str, final: bool) -> int:
        stream = tokenize(buffer, final=final)
        document = build_tree(stream.events)
        forced = document.force_close() if final else 0
        self._closed, self._pending = materialize_slides(document, self.config)
        self._open_elements = len(document.stack)
        return forced

    def ingest(self, markup: Union[str, bytes]) -> None:
        """Take the latest markup and re-derive the closed slides.

        Raises:
            MalformedInputError: The markup is not valid UTF-8. State is unchanged.
        """
        try:
            text = _decode(markup)
        except MalformedInputError as exc:
            self._log.emit("MALFORMED_INPUT", error=str(exc))
            raise
        self._buffer = self._resolve_buffer(text)
        self._finalized = False
        self._derive(self._buffer, final=False)
        self._log.emit(
            "INGEST",
            buffer_chars=len(self._buffer),
            closed_slides=len(self._closed),
            pending_slide=self._pending is not None,
        )

    def finalize(self) -> None:
        """Force-close every open element and promote the pending slide."""
        if self._finalized:
            return
        forced = self._derive(self._buffer, final=True)
        self._finalized = True
        self._log.emit("FINALIZE", forced_closes=forced, slides=len(self._closed))

    def all_slides(self) -> List[Slide]:
        """Snapshot of the closed slides, in document order."""
        return [slide.model_copy(deep=True) for slide in self._closed]

    def pending_slide(self) -> Optional[Slide]:
        """The slide still being generated, as it would look if closed now."""
        return self._pending.model_copy(deep=True) if self._pending is not None else None

    def reset(self) -> None:
        """Clear all state so the instance can parse a new document."""
        self._buffer = ""
        self._closed = []
        self._pending = None
        self._open_elements = 0
        self._finalized = False
        self._log.emit("RESET")
