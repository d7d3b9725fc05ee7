from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ControlState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class ItemReference:
    location: str
    slug: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"slug": list(self.slug), "location": self.location}


@dataclass
class TableEntry:
    id: str
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "title": self.title}


@dataclass
class ContentNode:
    """
    One node of a parsed document. `children` is None for leaves; optional
    fields left as None are dropped from the serialized form.
    """

    id: str
    type: str
    value: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    alt: Optional[str] = None
    depth: Optional[int] = None
    children: Optional[List[ContentNode]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "type": self.type}
        for name in ("value", "title", "url", "alt", "depth"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    def walk(self):
        """Yield this node and every descendant in pre-order."""
        yield self
        for child in self.children or []:
            yield from child.walk()

    def find(self, node_id: str) -> Optional[ContentNode]:
        for node in self.walk():
            if node.id == node_id:
                return node
        return None


@dataclass
class Content:
    body: ContentNode
    table_content: List[TableEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table_content": [entry.to_dict() for entry in self.table_content],
            "body": self.body.to_dict(),
        }


@dataclass
class GetContentResult:
    content_type: str
    buffer: bytes
    content: Content

    def to_dict(self) -> Dict[str, Any]:
        # The raw buffer stays in memory only.
        return {"content_type": self.content_type, "content": self.content.to_dict()}


@dataclass
class Item:
    slug: Tuple[str, ...]
    ref: ItemReference
    content: GetContentResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": list(self.slug),
            "ref": self.ref.to_dict(),
            "content": self.content.to_dict(),
        }
