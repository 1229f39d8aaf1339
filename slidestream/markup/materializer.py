"""Element tree to Slide conversion.

Each SECTION element becomes one Slide. Node shapes follow a fixed table keyed
by tag; unknown tags pass through as nodes named after the tag so newer markup
degrades instead of failing.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..models.config import ParserConfig
from ..models.slide import ContentNode, RootImage, Slide, TextLeaf
from .tokenizer import TextRun
from .tree import Document, Element
from .vocabulary import (
    LAYOUT_ITEM_TYPES,
    MARK_FLAGS,
    STRUCTURED_LAYOUT_TAGS,
    TEXT_BLOCK_TAGS,
    Tag,
)

InlineItem = Union[ContentNode, TextLeaf]
Child = Union[Element, TextRun]

_ALIGNMENTS = {"left", "center", "right"}


def _empty_children() -> List[InlineItem]:
    return [TextLeaf(text="")]


def _common_fields(element: Element) -> Dict[str, object]:
    fields: Dict[str, object] = {}
    align = element.attrs.get("align")
    if align:
        fields["align"] = align
    indent = element.attrs.get("indent", "").strip()
    if indent.isdigit():
        fields["indent"] = int(indent)
    return fields


def _is_inline_node(item: InlineItem) -> bool:
    """Unknown tags stay inline inside text; known tags break the text run."""
    return isinstance(item, ContentNode) and Tag.lookup(item.type) is Tag.UNKNOWN


def _tidy_inline(items: Sequence[InlineItem]) -> List[InlineItem]:
    """Trim whitespace at the edges of each text segment and drop empty leaves."""
    result: List[InlineItem] = []
    segment: List[InlineItem] = []

    def flush() -> None:
        last = len(segment) - 1
        for position, item in enumerate(segment):
            if isinstance(item, ContentNode):
                result.append(item)
                continue
            text = item.text
            if position == 0:
                text = text.lstrip()
            if position == last:
                text = text.rstrip()
            if text:
                result.append(item.model_copy(update={"text": text}))
        segment.clear()

    for item in items:
        if isinstance(item, TextLeaf) or _is_inline_node(item):
            segment.append(item)
        else:
            flush()
            result.append(item)
    flush()
    return result or _empty_children()


def _inline_items(children: Sequence[Child], marks: Dict[str, bool]) -> List[InlineItem]:
    items: List[InlineItem] = []
    for child in children:
        if isinstance(child, TextRun):
            items.append(TextLeaf(text=child.text, **marks))
            continue
        flag = MARK_FLAGS.get(child.tag)
        if flag is not None:
            items.extend(_inline_items(child.children, {**marks, flag: True}))
        elif child.tag is Tag.UNKNOWN:
            items.append(
                ContentNode(
                    type=child.name.lower(),
                    attributes=dict(child.attrs),
                    children=_inline_items(child.children, marks) or _empty_children(),
                    **_common_fields(child),
                )
            )
        else:
            items.extend(_element_nodes(child, parent=None))
    return items


def _text_block(element: Element) -> ContentNode:
    return ContentNode(
        type=element.name.lower(),
        children=_tidy_inline(_inline_items(element.children, {})),
        **_common_fields(element),
    )


def _block_children(
    children: Sequence[Child], parent: Optional[Tag], wrap_type: str = "p"
) -> List[ContentNode]:
    """Convert block-level children; bare text is wrapped in a ``wrap_type`` node."""
    nodes: List[ContentNode] = []
    for child in children:
        if isinstance(child, TextRun):
            if not child.is_whitespace:
                nodes.append(ContentNode(type=wrap_type, children=[TextLeaf(text=child.text.strip())]))
            continue
        nodes.extend(_element_nodes(child, parent))
    return nodes


def _image_node(element: Element) -> List[ContentNode]:
    query = element.attrs.get("query")
    url = element.attrs.get("url")
    if not (query and query.strip()) and not url:
        return []
    caption_text = element.attrs.get("caption")
    caption = None
    if caption_text:
        caption = [ContentNode(type="p", children=[TextLeaf(text=caption_text)])]
    return [
        ContentNode(
            type="img",
            query=query or None,
            url=url or None,
            caption=caption,
            children=_empty_children(),
            **_common_fields(element),
        )
    ]


def _chart_node(element: Element) -> ContentNode:
    return ContentNode(
        type="chart",
        chart_type=element.attrs.get("charttype") or None,
        children=_block_children(element.children, Tag.CHART),
        **_common_fields(element),
    )


def _element_nodes(element: Element, parent: Optional[Tag]) -> List[ContentNode]:
    tag = element.tag
    if tag is Tag.PRESENTATION:
        return _block_children(element.children, parent)
    if tag in TEXT_BLOCK_TAGS:
        return [_text_block(element)]
    if tag is Tag.IMG:
        return _image_node(element)
    if tag is Tag.ICON:
        return [
            ContentNode(
                type="icon",
                query=element.attrs.get("query") or None,
                children=_empty_children(),
                **_common_fields(element),
            )
        ]
    if tag in MARK_FLAGS:
        return [ContentNode(type="p", children=_tidy_inline(_inline_items([element], {})))]
    if tag is Tag.UL:
        return [
            ContentNode(
                type="ul",
                children=_block_children(element.children, tag, wrap_type="li"),
                **_common_fields(element),
            )
        ]
    if tag is Tag.DIV:
        return [
            ContentNode(
                type=LAYOUT_ITEM_TYPES.get(parent, "div"),
                children=_block_children(element.children, tag),
                **_common_fields(element),
            )
        ]
    if tag is Tag.CHART:
        return [_chart_node(element)]
    if tag is Tag.UNKNOWN:
        return [
            ContentNode(
                type=element.name.lower(),
                attributes=dict(element.attrs),
                children=_block_children(element.children, tag),
                **_common_fields(element),
            )
        ]
    # Layout containers, TABLE/TR, DATA and any stray SECTION content.
    return [
        ContentNode(
            type=tag.value.lower(),
            children=_block_children(element.children, tag),
            **_common_fields(element),
        )
    ]


def _root_image(element: Element) -> Optional[RootImage]:
    query = element.attrs.get("query")
    if not query or not query.strip():
        return None
    url = element.attrs.get("url") or None
    return RootImage(query=query, url=url, status="success" if url else "pending")


def _layout_type(section: Element, config: ParserConfig) -> Optional[str]:
    layout_map = config.layout_type_map
    raw = section.attrs.get("layout", "").strip().lower()
    if raw:
        if raw not in layout_map:
            return raw
        if layout_map[raw]:
            return layout_map[raw]
    for child in section.elements():
        if child.tag in STRUCTURED_LAYOUT_TAGS:
            return layout_map.get(child.tag.value.lower())
    return None


def _alignment(section: Element) -> Optional[str]:
    value = section.attrs.get("alignment") or section.attrs.get("align") or ""
    value = value.strip().lower()
    return value if value in _ALIGNMENTS else None


def build_slide(section: Element, index: int, config: ParserConfig) -> Slide:
    """Materialize one SECTION element as the ``index``-th slide (1-based)."""
    content: List[ContentNode] = []
    root_image: Optional[RootImage] = None
    for child in section.children:
        if isinstance(child, Element) and child.tag is Tag.IMG and root_image is None:
            root_image = _root_image(child)
            if root_image is not None:
                continue
        content.extend(_block_children([child], Tag.SECTION))

    return Slide(
        id=f"{config.slide_id_prefix}{index}",
        content=content,
        layout_type=_layout_type(section, config),
        root_image=root_image,
        alignment=_alignment(section),
    )


def materialize_slides(
    document: Document, config: ParserConfig
) -> Tuple[List[Slide], Optional[Slide]]:
    """Split the document into closed slides and at most one pending slide."""
    closed: List[Slide] = []
    pending: Optional[Slide] = None
    for index, section in enumerate(document.sections, start=1):
        slide = build_slide(section, index, config)
        if section.closed:
            closed.append(slide)
        else:
            pending = slide
    return closed, pending
