"""Mapping from a location's file extension to a normalized content type."""
from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath
from typing import Dict
from urllib.parse import unquote, urlparse

from .errors import UnsupportedExtension


class ContentType(str, Enum):
    """Content types understood by the pipeline."""

    MARKDOWN = "text/markdown"
    YAML = "application/x-yaml"
    # Only ever produced by refining YAML during pre-parse.
    OPENAPI = "application/openapi"


CONTENT_TYPES: Dict[str, ContentType] = {
    ".md": ContentType.MARKDOWN,
    ".markdown": ContentType.MARKDOWN,
    ".yaml": ContentType.YAML,
    ".yml": ContentType.YAML,
}


def location_suffix(location: str) -> str:
    path = unquote(urlparse(location).path)
    return PurePosixPath(path).suffix.lower()


def resolve_content_type(location: str) -> ContentType:
    """Return the content type declared by the location's extension.

    Raises `UnsupportedExtension` for suffixes missing from `CONTENT_TYPES`.
    """

    suffix = location_suffix(location)
    try:
        return CONTENT_TYPES[suffix]
    except KeyError as exc:
        raise UnsupportedExtension(f"Unsupported file extension: {suffix or '<none>'}") from exc
