"""Format-specific pre-parse and the content-type -> parse engine registry."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Type

import yaml

from .content_types import ContentType
from .engine import MarkdownParseEngine, OpenApiParseEngine, ParseEngine
from .errors import ParseFailure, UnsupportedContentType

logger = logging.getLogger(__name__)

PARSE_ENGINES: Dict[str, Type[ParseEngine]] = {
    ContentType.MARKDOWN.value: MarkdownParseEngine,
    ContentType.OPENAPI.value: OpenApiParseEngine,
}


@dataclass
class PreParsed:
    content_type: str
    payload: Any


def pre_parse(content_type: str, data: bytes) -> PreParsed:
    """Decode raw bytes and refine the declared content type.

    Markdown becomes a `MarkdownNode` tree. YAML is accepted only when the
    decoded mapping carries a string `openapi` field, in which case the
    type is refined to `application/openapi`.
    """

    if content_type == ContentType.MARKDOWN:
        try:
            document = MarkdownParseEngine.parse(data)
        except UnicodeDecodeError as exc:
            raise ParseFailure(f"Markdown source is not valid UTF-8: {exc}") from exc
        return PreParsed(content_type=ContentType.MARKDOWN.value, payload=document)

    if content_type == ContentType.YAML:
        try:
            document = yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise ParseFailure(f"Invalid YAML document: {exc}") from exc
        if isinstance(document, dict) and isinstance(document.get("openapi"), str):
            return PreParsed(content_type=ContentType.OPENAPI.value, payload=document)
        raise UnsupportedContentType(f"Unsupported content for {ContentType.YAML.value}: no openapi field")

    raise UnsupportedContentType(f"Unsupported content type: {content_type}")


def get_parse_engine(content_type: str) -> Type[ParseEngine]:
    engine_cls = PARSE_ENGINES.get(content_type)
    if engine_cls is None:
        raise UnsupportedContentType(f"No parse engine registered for content type: {content_type}")
    return engine_cls


def register_parse_engine(content_type: str, engine_cls: Type[ParseEngine]) -> None:
    previous = PARSE_ENGINES.get(content_type)
    if previous is not None and previous is not engine_cls:
        logger.warning("Replacing parse engine %s with %s for %s", previous.__name__, engine_cls.__name__, content_type)
    PARSE_ENGINES[content_type] = engine_cls
