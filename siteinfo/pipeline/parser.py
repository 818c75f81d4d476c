"""Lenient HTML parsing into a ``DocumentTree``.

BeautifulSoup with the lxml tree builder does the actual recovery work
(implied ``html``/``head``/``body``, auto-closed tags, unknown tags kept as
elements, charset taken from a ``<meta>`` declaration when present).  This
module only drains the byte stream and copies the soup into the arena.
"""

from __future__ import annotations

import logging
from typing import Iterable

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

from siteinfo.pipeline.errors import DecodeError, ParseError
from siteinfo.pipeline.tree import DocumentTree, NodeKind

logger = logging.getLogger(__name__)

_PARSER_FEATURES = "lxml"


def parse_document(stream: Iterable[bytes]) -> DocumentTree:
    """Consume *stream* and return a best-effort document tree.

    Malformed markup never fails; only an error while reading the stream
    (for instance a corrupt compressed body) does.

    Raises:
        ParseError: the stream could not be read to the end.
    """
    try:
        markup = b"".join(stream)
    except DecodeError as exc:
        raise ParseError(f"failed to read document body: {exc}") from exc
    if not markup.strip():
        return DocumentTree()

    try:
        # Keep ``rel``/``class`` etc. as the literal attribute strings.
        soup = BeautifulSoup(markup, _PARSER_FEATURES, multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        raise ParseError(f"failed to parse document: {exc}") from exc

    tree = _copy_soup(soup)
    logger.debug("Parsed %d bytes into %d nodes", len(markup), len(tree))
    return tree


def _copy_soup(soup: BeautifulSoup) -> DocumentTree:
    tree = DocumentTree()
    # ``descendants`` walks in document order, so a parent is always
    # registered before its children.
    index_of: dict[int, int] = {id(soup): tree.root.index}
    for element in soup.descendants:
        parent = tree.nodes[index_of[id(element.parent)]]
        if isinstance(element, Tag):
            attrs = tuple((name, _attr_value(value)) for name, value in element.attrs.items())
            node = tree.add(parent, NodeKind.ELEMENT, tag=element.name, attrs=attrs)
        elif isinstance(element, PreformattedString):
            # Comments, doctypes, CDATA, processing instructions.
            node = tree.add(parent, NodeKind.OTHER, text=str(element))
        elif isinstance(element, NavigableString):
            node = tree.add(parent, NodeKind.TEXT, text=str(element))
        else:
            continue
        index_of[id(element)] = node.index
    return tree


def _attr_value(value: str | list[str]) -> str:
    if isinstance(value, list):
        return " ".join(value)
    return value
