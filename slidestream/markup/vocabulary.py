"""Closed tag vocabulary for slide markup."""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


class Tag(str, Enum):
    PRESENTATION = "PRESENTATION"
    SECTION = "SECTION"
    H1 = "H1"
    H2 = "H2"
    H3 = "H3"
    P = "P"
    UL = "UL"
    LI = "LI"
    IMG = "IMG"
    ICON = "ICON"
    DIV = "DIV"
    COLUMNS = "COLUMNS"
    BULLETS = "BULLETS"
    ICONS = "ICONS"
    CYCLE = "CYCLE"
    ARROWS = "ARROWS"
    TIMELINE = "TIMELINE"
    PYRAMID = "PYRAMID"
    COMPARE = "COMPARE"
    TABLE = "TABLE"
    TR = "TR"
    TH = "TH"
    TD = "TD"
    CHART = "CHART"
    DATA = "DATA"
    LABEL = "LABEL"
    VALUE = "VALUE"
    # Inline marks
    B = "B"
    STRONG = "STRONG"
    I = "I"  # noqa: E741
    EM = "EM"
    U = "U"
    CODE = "CODE"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def lookup(cls, name: str) -> "Tag":
        """Resolve a raw tag name case-insensitively; unknown names map to UNKNOWN."""
        try:
            tag = cls(name.upper())
        except ValueError:
            return cls.UNKNOWN
        return tag


WRAPPER_TAGS: FrozenSet[Tag] = frozenset({Tag.PRESENTATION})

VOID_TAGS: FrozenSet[Tag] = frozenset({Tag.IMG, Tag.ICON})

TEXT_BLOCK_TAGS: FrozenSet[Tag] = frozenset(
    {Tag.H1, Tag.H2, Tag.H3, Tag.P, Tag.LI, Tag.TH, Tag.TD, Tag.LABEL, Tag.VALUE}
)

# Item node type produced for a DIV directly inside each layout container.
LAYOUT_ITEM_TYPES: Dict[Tag, str] = {
    Tag.COLUMNS: "column",
    Tag.BULLETS: "bullet",
    Tag.ICONS: "icon-item",
    Tag.CYCLE: "cycle-item",
    Tag.ARROWS: "arrow-item",
    Tag.TIMELINE: "timeline-item",
    Tag.PYRAMID: "pyramid-item",
    Tag.COMPARE: "compare-side",
}

STRUCTURED_LAYOUT_TAGS: FrozenSet[Tag] = frozenset(LAYOUT_ITEM_TYPES) | {Tag.TABLE, Tag.CHART}

MARK_FLAGS: Dict[Tag, str] = {
    Tag.B: "bold",
    Tag.STRONG: "bold",
    Tag.I: "italic",
    Tag.EM: "italic",
    Tag.U: "underline",
    Tag.CODE: "code",
}
