"""Streaming parser for LLM-generated slide markup."""

from .config import load_config
from .errors import MalformedInputError
from .markup.parser import SlideParser
from .models import ContentNode, ParserConfig, RootImage, Slide, TextLeaf

__all__ = [
    "ContentNode",
    "MalformedInputError",
    "ParserConfig",
    "RootImage",
    "Slide",
    "SlideParser",
    "TextLeaf",
    "load_config",
]
