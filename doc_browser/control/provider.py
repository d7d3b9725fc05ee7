from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

from .content_types import CONTENT_TYPES
from .models import ItemReference

logger = logging.getLogger(__name__)


class ItemSource(Protocol):
    """
    Where items come from. Every operation is optional: `Control` treats a
    missing `init` as a no-op, a missing `list_items` as an empty listing and
    a missing `select_item` as "not found". Implementations may use plain or
    coroutine functions.
    """

    async def init(self) -> None:
        ...

    async def list_items(self) -> List[ItemReference]:
        ...

    async def select_item(self, slug: Sequence[str]) -> Optional[ItemReference]:
        ...


class DirProvider:
    """
    Filesystem item source. Walks `root` once at `init()` and serves the
    cached listing afterwards; the slug of a file is its relative directory
    names plus the file stem.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self._items: Optional[List[ItemReference]] = None

    async def init(self) -> None:
        if not self.root.is_dir():
            raise NotADirectoryError(f"{self.root} is not a directory")
        items = await asyncio.to_thread(lambda: list(self._scan()))
        self._items = items
        logger.info("Indexed %s items under %s", len(items), self.root)

    async def list_items(self) -> List[ItemReference]:
        return list(self._items or [])

    async def select_item(self, slug: Sequence[str]) -> Optional[ItemReference]:
        wanted = tuple(slug)
        for item in self._items or []:
            if item.slug == wanted:
                return item
        return None

    def _scan(self) -> Iterator[ItemReference]:
        base = self.root.resolve()
        for path, slug in _walk(base, ()):
            yield ItemReference(location=path.as_uri(), slug=slug)


def _walk(directory: Path, prefix: Tuple[str, ...]) -> Iterator[Tuple[Path, Tuple[str, ...]]]:
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            yield from _walk(entry, prefix + (entry.name,))
        elif entry.is_file() and entry.suffix.lower() in CONTENT_TYPES:
            yield entry, prefix + (entry.stem,)
