from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Dict
from urllib.parse import urlparse
from urllib.request import url2pathname

from .content_types import ContentType, resolve_content_type
from .errors import UnsupportedScheme

logger = logging.getLogger(__name__)


@dataclass
class Source:
    location: str
    content_type: ContentType
    data: bytes


def file_url_to_path(location: str) -> Path:
    return Path(url2pathname(urlparse(location).path))


class SourceStorage:
    """
    Fetches raw document bytes for a location. Readers are keyed by URL
    scheme; only local `file:` locations are handled.
    """

    def __init__(self) -> None:
        self._readers: Dict[str, Callable[[str], Awaitable[bytes]]] = {
            "file": self._read_file,
        }

    def supports(self, location: str) -> bool:
        return urlparse(location).scheme in self._readers

    async def download(self, location: str) -> Source:
        """
        Check the scheme, resolve the declared content type, then read bytes.
        Nothing is read for unsupported schemes or extensions.
        """
        scheme = urlparse(location).scheme
        reader = self._readers.get(scheme)
        if reader is None:
            raise UnsupportedScheme(f"Unsupported location scheme: {scheme or '<none>'}")

        content_type = resolve_content_type(location)
        data = await reader(location)
        logger.debug("Downloaded %s bytes from %s (%s)", len(data), location, content_type.value)
        return Source(location=location, content_type=content_type, data=data)

    async def _read_file(self, location: str) -> bytes:
        return await asyncio.to_thread(_read_path, file_url_to_path(location))


def _read_path(path: Path) -> bytes:
    if not path.is_file():
        raise FileNotFoundError(f"Source not found at {path}")
    return path.read_bytes()
