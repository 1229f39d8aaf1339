"""Pydantic models for slidestream contracts."""

from .base import SlideBaseModel
from .config import ParserConfig, collapsed_layout_map, literal_layout_map
from .slide import ContentNode, RootImage, Slide, TextLeaf

__all__ = [
    "ParserConfig",
    "SlideBaseModel",
    "ContentNode",
    "RootImage",
    "Slide",
    "TextLeaf",
    "collapsed_layout_map",
    "literal_layout_map",
]
