"""Element tree assembly from tokenizer events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from .tokenizer import CloseTag, Event, OpenTag, TextRun
from .vocabulary import VOID_TAGS, Tag


@dataclass
class Element:
    name: str
    tag: Tag
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List[Union["Element", TextRun]] = field(default_factory=list)
    closed: bool = False
    forced: bool = False

    def elements(self) -> List["Element"]:
        return [child for child in self.children if isinstance(child, Element)]


@dataclass
class Document:
    """Root of the element tree plus the stack of still-open elements."""

    root: Element = field(default_factory=lambda: Element(name="#document", tag=Tag.UNKNOWN))
    stack: List[Element] = field(default_factory=list)
    sections: List[Element] = field(default_factory=list)

    @property
    def current(self) -> Element:
        return self.stack[-1] if self.stack else self.root

    def open_section(self) -> Optional[Element]:
        for element in reversed(self.stack):
            if element.tag is Tag.SECTION:
                return element
        return None

    def force_close(self) -> int:
        """Close every open element, innermost first; return how many were closed."""
        count = 0
        while self.stack:
            element = self.stack.pop()
            element.closed = True
            element.forced = True
            count += 1
        return count

    def _pop_through(self, target: Element) -> None:
        while self.stack:
            element = self.stack.pop()
            element.closed = True
            if element is target:
                return

    def _find_open(self, tag: Tag, name: str) -> Optional[Element]:
        for element in reversed(self.stack):
            if element.tag is tag and element.name == name:
                return element
        return None

    def feed(self, event: Event) -> None:
        if isinstance(event, TextRun):
            self.current.children.append(event)
        elif isinstance(event, OpenTag):
            self._open(event)
        elif isinstance(event, CloseTag):
            self._close(event)

    def _open(self, event: OpenTag) -> None:
        if event.tag is Tag.SECTION:
            # A new slide boundary ends a section that was never closed.
            previous = self.open_section()
            if previous is not None:
                self._pop_through(previous)
        element = Element(name=event.name, tag=event.tag, attrs=dict(event.attrs))
        self.current.children.append(element)
        if event.tag is Tag.SECTION:
            self.sections.append(element)
        if event.self_closing or event.tag in VOID_TAGS:
            element.closed = True
        else:
            self.stack.append(element)

    def _close(self, event: CloseTag) -> None:
        if event.implied:
            return
        target = self._find_open(event.tag, event.name)
        if target is not None:
            self._pop_through(target)


def build_tree(events: Iterable[Event]) -> Document:
    """Assemble events into a Document; elements without a close tag stay open."""
    document = Document()
    for event in events:
        document.feed(event)
    return document
