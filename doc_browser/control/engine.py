from __future__ import annotations

import logging
import re
from typing import Any, List, Optional
from urllib.parse import urljoin

from .errors import ParseFailure
from .markdown_ast import MarkdownAstBuilder, MarkdownNode
from .models import Content, ContentNode, TableEntry

logger = logging.getLogger(__name__)

# ASCII word class keeps ids identical for accented titles across runtimes.
_NON_WORD_RE = re.compile(r"\W", re.ASCII)

HEADER_KIND = "Header"


class ParseEngine:
    """
    Abstract parse engine. An instance is built per item from the document
    location and the pre-parsed payload, and turns it into `Content`.
    """

    def __init__(self, location: str, payload: Any):
        self.location = location
        self.payload = payload

    def to_content_nodes(self) -> Content:
        raise NotImplementedError


class MarkdownParseEngine(ParseEngine):
    """
    Maps a `MarkdownNode` tree onto `ContentNode`s while collecting the table
    of contents in the same pre-order traversal.

    Node ids are `"<start>-<end>-<title slug>"` cut to `max_id_length`
    characters. A container and its only child can share a range and title,
    and so an id; ids are not otherwise disambiguated.
    """

    max_id_length = 30

    payload: MarkdownNode

    @staticmethod
    def parse(data: bytes, builder: Optional[MarkdownAstBuilder] = None) -> MarkdownNode:
        text = data.decode("utf-8")
        return (builder or MarkdownAstBuilder()).build(text)

    def to_content_nodes(self) -> Content:
        table_content: List[TableEntry] = []
        body = self._to_content_node(self.payload, table_content)
        logger.debug("Built %s table entries for %s", len(table_content), self.location)
        return Content(body=body, table_content=table_content)

    def _to_content_node(self, node: MarkdownNode, table_content: List[TableEntry]) -> ContentNode:
        title = node_text(node)
        node_id = self.node_id(node, title)

        content_node = ContentNode(
            id=node_id,
            type=node.type,
            value=node.value,
            title=node.title,
            url=self.resolve_url(node.url),
            alt=node.alt,
            depth=node.depth,
        )
        # Register the heading before descending so entries stay in pre-order.
        if node.type == HEADER_KIND:
            table_content.append(TableEntry(id=node_id, title=title))
        if node.children is not None:
            content_node.children = [self._to_content_node(child, table_content) for child in node.children]
        return content_node

    def node_id(self, node: MarkdownNode, title: str) -> str:
        start, end = node.range
        return f"{start}-{end}-{slugify(title)}"[: self.max_id_length]

    def resolve_url(self, url: Optional[str]) -> Optional[str]:
        if not url:
            return None
        return urljoin(self.location, url)


class OpenApiParseEngine(ParseEngine):
    """
    Placeholder for OpenAPI documents. Takes the decoded YAML mapping as
    payload; building content is not implemented yet.
    """

    def to_content_nodes(self) -> Content:
        raise ParseFailure(f"OpenAPI parse engine is not implemented ({self.location})")


def node_text(node: MarkdownNode) -> str:
    """Concatenate the text values under `node` in document order."""
    if isinstance(node.value, str):
        return node.value
    if node.children:
        return "".join(node_text(child) for child in node.children)
    return ""


def slugify(title: str) -> str:
    return _NON_WORD_RE.sub("-", title).lower()
