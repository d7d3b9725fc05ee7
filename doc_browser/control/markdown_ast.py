"""
Generic Markdown AST consumed by `MarkdownParseEngine`.

markdown-it-py produces the token stream; this module maps it onto the
usual node kinds (Document, Header, Paragraph, Str, Link, ...) and attaches a
character range `(start, end)` to every node. Block ranges come from the token
line maps. Inline tokens carry no positions, so they are located with a
forward-only cursor over the source text, bounded by the enclosing block.
Ranges index into the text after newline normalization (`\\r\\n` -> `\\n`).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

NODE_KINDS = {
    "root": "Document",
    "paragraph": "Paragraph",
    "heading": "Header",
    "blockquote": "BlockQuote",
    "bullet_list": "List",
    "ordered_list": "List",
    "list_item": "ListItem",
    "fence": "CodeBlock",
    "code_block": "CodeBlock",
    "html_block": "Html",
    "hr": "HorizontalRule",
    "table": "Table",
    "tr": "TableRow",
    "th": "TableCell",
    "td": "TableCell",
    "text": "Str",
    "softbreak": "Break",
    "hardbreak": "Break",
    "code_inline": "Code",
    "html_inline": "Html",
    "em": "Emphasis",
    "strong": "Strong",
    "s": "Delete",
    "link": "Link",
    "image": "Image",
}

# Wrappers whose children are attached to the enclosing node.
_TRANSPARENT = {"inline", "thead", "tbody"}

_LEAF_BLOCKS_WITH_VALUE = {"fence", "code_block", "html_block"}

# Markers a container repeats in front of its children on every line.
_CONTAINER_PREFIXES = {
    "blockquote": re.compile(r"[ \t]{0,3}>[ \t]?"),
    "list_item": re.compile(r"[ \t]*"),
}


@dataclass
class MarkdownNode:
    type: str
    range: Tuple[int, int]
    value: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    alt: Optional[str] = None
    depth: Optional[int] = None
    children: Optional[List[MarkdownNode]] = None


def default_parser() -> MarkdownIt:
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


class MarkdownAstBuilder:
    """
    Turns Markdown text into a `MarkdownNode` tree. The parser instance is
    reusable; every `build` call walks a fresh token stream.
    """

    def __init__(self, parser: Optional[MarkdownIt] = None):
        self.parser = parser or default_parser()

    def build(self, text: str) -> MarkdownNode:
        text = normalize_newlines(text)
        tree = SyntaxTreeNode(self.parser.parse(text))
        return _RangeWalker(text).document(tree)


def parse_markdown(text: str, parser: Optional[MarkdownIt] = None) -> MarkdownNode:
    return MarkdownAstBuilder(parser).build(text)


class _RangeWalker:
    def __init__(self, text: str):
        self.text = text
        self.line_starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self.line_starts.append(index + 1)
        self.pos = 0
        self.limit = len(text)
        self.containers: List[str] = []

    def document(self, tree: SyntaxTreeNode) -> MarkdownNode:
        return MarkdownNode(
            type=NODE_KINDS["root"],
            range=(0, len(self.text)),
            children=self._block_children(tree),
        )

    # Blocks -----------------------------------------------------------------

    def _block_children(self, node: SyntaxTreeNode) -> List[MarkdownNode]:
        result: List[MarkdownNode] = []
        for child in node.children:
            if child.type == "inline":
                result.extend(self._inline(grandchild) for grandchild in child.children)
            elif child.type in _TRANSPARENT:
                result.extend(self._block_children(child))
            else:
                result.append(self._block(child))
        return result

    def _block(self, node: SyntaxTreeNode) -> MarkdownNode:
        span = self._line_span(node.map)
        outer_limit = self.limit
        if span is not None:
            start = self._nested_start(*span)
            span = (start, span[1])
            self.pos = max(self.pos, start)
            self.limit = span[1]
        container = node.type in _CONTAINER_PREFIXES
        if container:
            if span is not None:
                self.pos = self._content_start(node, span[0])
            self.containers.append(node.type)
        try:
            children = self._block_children(node) if node.nester_tokens is not None else None
        finally:
            self.limit = outer_limit
            if container:
                self.containers.pop()

        if span is None:
            span = self._children_span(children)
        self.pos = max(self.pos, span[1])

        return MarkdownNode(
            type=NODE_KINDS.get(node.type, node.type),
            range=span,
            value=node.content if node.type in _LEAF_BLOCKS_WITH_VALUE else None,
            depth=int(node.tag[1:]) if node.type == "heading" else None,
            children=children,
        )

    def _nested_start(self, start: int, end: int) -> int:
        """Skip the markers of enclosing blockquotes and list items on the first line."""
        for kind in self.containers:
            match = _CONTAINER_PREFIXES[kind].match(self.text, start, end)
            if match is None:
                break
            start = match.end()
        return min(max(start, self.pos), end)

    def _content_start(self, node: SyntaxTreeNode, start: int) -> int:
        if node.type == "blockquote":
            match = _CONTAINER_PREFIXES["blockquote"].match(self.text, start, self.limit)
            return match.end() if match else start
        # List item: bullet or ordinal delimiter, then the spaces before its content.
        marker = self.text.find(node.markup, start, self.limit) if node.markup else -1
        if marker < 0:
            return start
        index = marker + len(node.markup)
        while index < self.limit and self.text[index] in " \t":
            index += 1
        return index

    def _line_span(self, line_map: Optional[Sequence[int]]) -> Optional[Tuple[int, int]]:
        if not line_map:
            return None
        first, last = line_map
        start = self._line_start(first)
        end = self._line_start(last)
        while end > start and self.text[end - 1] == "\n":
            end -= 1
        return start, end

    def _line_start(self, line: int) -> int:
        if line < len(self.line_starts):
            return self.line_starts[line]
        return len(self.text)

    def _children_span(self, children: Optional[List[MarkdownNode]]) -> Tuple[int, int]:
        if children:
            return children[0].range[0], children[-1].range[1]
        return self.pos, self.pos

    # Inlines ----------------------------------------------------------------

    def _inline(self, node: SyntaxTreeNode) -> MarkdownNode:
        kind = NODE_KINDS.get(node.type, node.type)

        if node.type in ("text", "html_inline"):
            return MarkdownNode(type=kind, range=self._consume(node.content), value=node.content)

        if node.type in ("softbreak", "hardbreak"):
            return MarkdownNode(type=kind, range=self._consume("\n"), value="\n")

        if node.type == "code_inline":
            start, _ = self._consume(node.markup)
            self._consume(node.content)
            _, end = self._consume(node.markup)
            return MarkdownNode(type=kind, range=(start, end), value=node.content)

        if node.type == "image":
            # Alt text is kept as an attribute; images have no children.
            start, _ = self._consume("![")
            self._consume(node.content)
            end = self._close_link()
            return MarkdownNode(
                type=kind,
                range=(start, end),
                url=_attr(node, "src"),
                title=_attr(node, "title"),
                alt=node.content,
            )

        if node.type == "link":
            autolink = node.markup == "autolink"
            start, _ = self._consume("<" if autolink else "[")
            children = [self._inline(child) for child in node.children]
            end = self._consume(">")[1] if autolink else self._close_link()
            return MarkdownNode(
                type=kind,
                range=(start, end),
                url=_attr(node, "href"),
                title=_attr(node, "title"),
                children=children,
            )

        if node.nester_tokens is not None and node.markup:
            # Emphasis-like spans: em, strong, s.
            start, _ = self._consume(node.markup)
            children = [self._inline(child) for child in node.children]
            _, end = self._consume(node.markup)
            return MarkdownNode(type=kind, range=(start, end), children=children)

        children = [self._inline(child) for child in node.children] if node.children else None
        if children:
            return MarkdownNode(type=kind, range=self._children_span(children), children=children)
        value = node.content if node.token is not None and node.token.content else None
        if value:
            return MarkdownNode(type=kind, range=self._consume(value), value=value)
        return MarkdownNode(type=kind, range=(self.pos, self.pos))

    def _consume(self, needle: str) -> Tuple[int, int]:
        """
        Locate `needle` at or after the cursor and move past it. Text that no
        longer matches the source (entities, escapes) yields an empty range
        at the cursor and leaves it in place.
        """
        index = self.text.find(needle, self.pos, self.limit)
        if index < 0:
            return self.pos, self.pos
        self.pos = index + len(needle)
        return index, self.pos

    def _close_link(self) -> int:
        _, end = self._consume("]")
        if end >= self.limit:
            return end
        if self.text[end] == "(":
            depth = 0
            index = end
            while index < self.limit:
                char = self.text[index]
                if char == "\\":
                    index += 2
                    continue
                if char == "(":
                    depth += 1
                elif char == ")":
                    depth -= 1
                    if depth == 0:
                        self.pos = index + 1
                        return self.pos
                index += 1
            return end
        if self.text[end] == "[":
            self.pos = end + 1
            _, end = self._consume("]")
        return end


def _attr(node: SyntaxTreeNode, name: str) -> Optional[str]:
    value = node.attrs.get(name)
    return None if value is None else str(value)
