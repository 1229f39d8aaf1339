"""Slide document contracts."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import Field, constr

from .base import SlideBaseModel

NonEmptyStr = constr(min_length=1)
ImageStatus = Literal["pending", "generating", "success", "error"]
Alignment = Literal["left", "center", "right"]


class TextLeaf(SlideBaseModel):
    text: str
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    code: Optional[bool] = None


class ContentNode(SlideBaseModel):
    type: NonEmptyStr
    children: List[Union[ContentNode, TextLeaf]] = Field(default_factory=list)
    align: Optional[str] = None
    indent: Optional[int] = None
    url: Optional[str] = None
    caption: Optional[List[ContentNode]] = None
    query: Optional[str] = None
    chart_type: Optional[str] = Field(default=None, alias="chartType")
    attributes: Optional[Dict[str, str]] = None

    def plain_text(self) -> str:
        """Concatenate the text of every leaf below this node."""
        parts: List[str] = []
        for child in self.children:
            if isinstance(child, TextLeaf):
                parts.append(child.text)
            else:
                parts.append(child.plain_text())
        return "".join(parts)


class RootImage(SlideBaseModel):
    query: NonEmptyStr
    url: Optional[str] = None
    status: ImageStatus = "pending"


class Slide(SlideBaseModel):
    id: NonEmptyStr
    content: List[ContentNode] = Field(default_factory=list)
    layout_type: Optional[str] = Field(default=None, alias="layoutType")
    root_image: Optional[RootImage] = Field(default=None, alias="rootImage")
    alignment: Optional[Alignment] = None


ContentNode.model_rebuild()
