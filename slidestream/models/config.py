"""Parser config model."""

from __future__ import annotations

from typing import Dict, Literal, Optional

from pydantic import Field

from .base import SlideBaseModel

IngestMode = Literal["auto", "cumulative", "delta"]

BASE_LAYOUT_TYPES = ("left", "right", "vertical", "title", "content")
STRUCTURED_LAYOUT_TYPES = (
    "columns",
    "bullets",
    "icons",
    "cycle",
    "arrows",
    "timeline",
    "pyramid",
    "compare",
    "table",
    "chart",
)


def literal_layout_map() -> Dict[str, Optional[str]]:
    """Structured layout tags surface as their own lower-case name."""
    mapping: Dict[str, Optional[str]] = {name: name for name in BASE_LAYOUT_TYPES}
    mapping.update({name: name for name in STRUCTURED_LAYOUT_TYPES})
    return mapping


def collapsed_layout_map() -> Dict[str, Optional[str]]:
    """Structured layout tags fold into the base ``content`` layout."""
    mapping: Dict[str, Optional[str]] = {name: name for name in BASE_LAYOUT_TYPES}
    mapping.update({name: "content" for name in STRUCTURED_LAYOUT_TYPES})
    return mapping


class ParserConfig(SlideBaseModel):
    ingest_mode: IngestMode = Field(
        "auto", description="How successive ingest() inputs relate to each other"
    )
    layout_type_map: Dict[str, Optional[str]] = Field(
        default_factory=literal_layout_map,
        description="Raw layout key (SECTION layout attribute or layout tag) to layoutType",
    )
    slide_id_prefix: str = Field("slide-", description="Prefix for sequential slide ids")
