"""
Content control subsystem exports.
"""

from .config import ControlConfig
from .content_types import CONTENT_TYPES, ContentType, resolve_content_type
from .control import Control
from .dispatch import PARSE_ENGINES, PreParsed, get_parse_engine, pre_parse, register_parse_engine
from .engine import MarkdownParseEngine, OpenApiParseEngine, ParseEngine
from .errors import (
    ControlError,
    InitializationFailure,
    ParseFailure,
    UnsupportedContentType,
    UnsupportedExtension,
    UnsupportedScheme,
)
from .markdown_ast import MarkdownAstBuilder, MarkdownNode, parse_markdown
from .models import (
    Content,
    ContentNode,
    ControlState,
    GetContentResult,
    Item,
    ItemReference,
    TableEntry,
)
from .provider import DirProvider, ItemSource
from .storage import Source, SourceStorage

__all__ = [
    "CONTENT_TYPES",
    "Content",
    "ContentNode",
    "ContentType",
    "Control",
    "ControlConfig",
    "ControlError",
    "ControlState",
    "DirProvider",
    "GetContentResult",
    "InitializationFailure",
    "Item",
    "ItemReference",
    "ItemSource",
    "MarkdownAstBuilder",
    "MarkdownNode",
    "MarkdownParseEngine",
    "OpenApiParseEngine",
    "PARSE_ENGINES",
    "ParseEngine",
    "ParseFailure",
    "PreParsed",
    "Source",
    "SourceStorage",
    "TableEntry",
    "UnsupportedContentType",
    "UnsupportedExtension",
    "UnsupportedScheme",
    "get_parse_engine",
    "parse_markdown",
    "pre_parse",
    "register_parse_engine",
    "resolve_content_type",
]
