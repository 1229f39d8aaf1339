"""Streaming-tolerant tag tokenizer for slide markup.

The tokenizer is a pure function of the buffer: the same text always yields the
same events. A trailing tag that has not reached its ``>`` yet is left
unconsumed so the next, longer buffer can complete it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from .vocabulary import Tag

_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9_.:-]*")
_ATTR_NAME_RE = re.compile(r"[A-Za-z_:][A-Za-z0-9_.:-]*")
_UNQUOTED_VALUE_RE = re.compile(r"[^\s>]*")


@dataclass(frozen=True)
class OpenTag:
    name: str
    tag: Tag
    attrs: Dict[str, str] = field(default_factory=dict)
    self_closing: bool = False
    offset: int = 0


@dataclass(frozen=True)
class CloseTag:
    name: str
    tag: Tag
    offset: int = 0
    # Paired with a self-closing open tag rather than written out.
    implied: bool = False


@dataclass(frozen=True)
class TextRun:
    text: str
    offset: int = 0

    @property
    def is_whitespace(self) -> bool:
        return not self.text.strip()


Event = Union[OpenTag, CloseTag, TextRun]


@dataclass(frozen=True)
class TokenStream:
    events: List[Event]
    consumed: int
    tail: str = ""

    @property
    def incomplete(self) -> bool:
        """True when a trailing tag fragment is still waiting for more text."""
        return bool(self.tail)


class _Incomplete(Exception):
    """Raised internally when the buffer ends inside a tag."""


_ScannedTag = Tuple[List[Event], int]


def _skip_space(text: str, pos: int) -> int:
    length = len(text)
    while pos < length and text[pos].isspace():
        pos += 1
    return pos


def _scan_quoted(text: str, pos: int, quote: str) -> Tuple[Optional[str], int]:
    """Scan a quoted value starting at the opening quote.

    Returns ``(value, next_pos)``. When a ``>`` appears before the closing quote
    the value is unterminated: ``None`` is returned and ``next_pos`` points at
    that ``>`` so it closes the tag.
    """
    close = text.find(quote, pos + 1)
    gt = text.find(">", pos + 1)
    if close == -1 and gt == -1:
        raise _Incomplete()
    if close != -1 and (gt == -1 or close < gt):
        return text[pos + 1:close], close + 1
    return None, gt


def _scan_attributes(text: str, pos: int) -> Tuple[Dict[str, str], bool, int]:
    """Scan attributes up to and including the closing ``>``."""
    length = len(text)
    attrs: Dict[str, str] = {}
    self_closing = False
    while True:
        if pos >= length:
            raise _Incomplete()
        char = text[pos]
        if char == ">":
            return attrs, self_closing, pos + 1
        if char.isspace():
            pos += 1
            continue
        if char == "/":
            self_closing = True
            pos += 1
            continue
        self_closing = False
        match = _ATTR_NAME_RE.match(text, pos)
        if not match:
            # Stray character inside a tag.
            pos += 1
            continue
        attr_name = match.group(0).lower()
        pos = _skip_space(text, match.end())
        if pos >= length:
            raise _Incomplete()
        if text[pos] != "=":
            # Valueless attribute: dropped.
            continue
        pos = _skip_space(text, pos + 1)
        if pos >= length:
            raise _Incomplete()
        quote = text[pos]
        if quote == '"':
            value, pos = _scan_quoted(text, pos, '"')
            if value is not None:
                attrs.setdefault(attr_name, value)
        elif quote == "'":
            # Only double-quoted values are accepted.
            _, pos = _scan_quoted(text, pos, "'")
        else:
            pos = _UNQUOTED_VALUE_RE.match(text, pos).end()


def _scan_tag(text: str, start: int) -> Optional[_ScannedTag]:
    """Scan a tag beginning at ``text[start] == "<"``.

    Returns ``None`` when the ``<`` does not start a tag and is literal text.
    Raises ``_Incomplete`` when the buffer ends before the tag does.
    """
    length = len(text)
    pos = start + 1
    if pos >= length:
        raise _Incomplete()
    closing = text[pos] == "/"
    if closing:
        pos += 1
        if pos >= length:
            raise _Incomplete()
    match = _NAME_RE.match(text, pos)
    if not match:
        return None
    if match.end() >= length:
        raise _Incomplete()
    name = match.group(0)
    tag = Tag.lookup(name)
    attrs, self_closing, end = _scan_attributes(text, match.end())

    if closing:
        return [CloseTag(name=name.upper(), tag=tag, offset=start)], end
    events: List[Event] = [
        OpenTag(name=name.upper(), tag=tag, attrs=attrs, self_closing=self_closing, offset=start)
    ]
    if self_closing:
        events.append(CloseTag(name=name.upper(), tag=tag, offset=start, implied=True))
    return events, end


def tokenize(text: str, final: bool = False) -> TokenStream:
    """Tokenize the whole buffer into open-tag, close-tag and text events.

    Args:
        text: Full markup received so far.
        final: When True the stream has ended; an incomplete trailing tag is
            discarded instead of being held back.

    Returns:
        TokenStream with the events, the offset consumed and any held-back tail.
    """
    events: List[Event] = []
    length = len(text)
    pos = 0
    text_start = 0

    def flush_text(end: int) -> None:
        if end > text_start:
            events.append(TextRun(text=text[text_start:end], offset=text_start))

    while pos < length:
        lt = text.find("<", pos)
        if lt == -1:
            break
        try:
            scanned = _scan_tag(text, lt)
        except _Incomplete:
            flush_text(lt)
            if final:
                return TokenStream(events=events, consumed=length)
            return TokenStream(events=events, consumed=lt, tail=text[lt:])
        if scanned is None:
            pos = lt + 1
            continue
        flush_text(lt)
        tag_events, pos = scanned
        events.extend(tag_events)
        text_start = pos

    flush_text(length)
    return TokenStream(events=events, consumed=length)
