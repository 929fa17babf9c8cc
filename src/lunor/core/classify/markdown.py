"""Markdown-like prose classification for body lines"""

from typing import Optional

from lunor.core.classify.base import Classification, SourceLine
from lunor.core.expressions import extract_expression
from lunor.core.grammar import (
    BOLD_RE,
    HEADER_RE,
    IMAGE_RE,
    ITALIC_RE,
    LINK_RE,
    LIST_ITEM_RE,
    STYLE_SUFFIX_RE,
)
from lunor.core.models import Expression, Markdown, Text


def _split_style(text: str) -> tuple[str, dict]:
    """Strip a trailing style="..." suffix and return (remaining, attributes)."""
    m = STYLE_SUFFIX_RE.match(text)
    if m and m.group(1).strip():
        return m.group(1).strip(), {'style': m.group(2)}
    return text, {}


def _inline(tag: str, text: str, attributes: dict) -> Markdown:
    return Markdown(tag=tag, attributes=attributes, children=[Text(value=extract_expression(text))])


def parse_markdown(text: str, in_list: bool = False) -> Optional[Markdown]:
    """Classify one trimmed prose line.

    Tried in order: bold, italic, link, image, header, list item, then a
    paragraph fallback. A list item inside an already open list is returned
    as a bare `li`; otherwise it is wrapped in a new `ul`.
    """
    text, attributes = _split_style(text.strip())
    if not text:
        return None

    if m := BOLD_RE.match(text):
        return _inline('strong', m.group(1), attributes)

    if m := ITALIC_RE.match(text):
        return _inline('em', m.group(1), attributes)

    if m := LINK_RE.match(text):
        node = _inline('a', m.group(1), attributes)
        node.attributes['href'] = extract_expression(m.group(2))
        return node

    if m := IMAGE_RE.match(text):
        attributes.update(src=extract_expression(m.group(2)), alt=extract_expression(m.group(1)))
        return Markdown(tag='img', attributes=attributes)

    if m := HEADER_RE.match(text):
        return Markdown(tag=f"h{len(m.group(1))}", value=extract_expression(m.group(2)), attributes=attributes)

    if m := LIST_ITEM_RE.match(text):
        item = Markdown(tag='li', value=extract_expression(m.group(1)), attributes=attributes)
        if in_list:
            return item
        return Markdown(tag='ul', children=[item])

    value = extract_expression(text)
    tag = 'div' if isinstance(value, Expression) else 'p'
    return Markdown(tag=tag, value=value, attributes=attributes)


def classify_markdown(line: SourceLine) -> Optional[Classification]:
    node = parse_markdown(line.stripped, line.in_list)
    return Classification(node) if node else None
