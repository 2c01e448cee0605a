"""Data models shared by the discovery, topic and pipeline layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class UrlKeywordRecord:
    """A URL paired with the space-joined keywords found in its path."""

    url: str
    keywords: str

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "keywords": self.keywords}


@dataclass
class TopicCount:
    """A named sub-topic of a folder or blog corpus with an estimated size."""

    name: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "count": self.count}


@dataclass
class Topic:
    """A site-wide topic as returned by the extraction job."""

    name: str
    description: Optional[str] = None
    count: int = 0


@dataclass
class TopicWithUrls:
    """A topic bucket that URLs are appended to during the classification merge."""

    name: str
    description: Optional[str] = None
    urls: List[UrlKeywordRecord] = field(default_factory=list)
    count: int = 0

    @classmethod
    def from_topic(cls, topic: Topic) -> "TopicWithUrls":
        return cls(name=topic.name, description=topic.description)

    def add(self, record: UrlKeywordRecord) -> None:
        self.urls.append(record)
        self.count += 1

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.description is not None:
            data["description"] = self.description
        data["urls"] = [r.to_dict() for r in self.urls]
        data["count"] = self.count
        return data


@dataclass
class FolderGroup:
    """URLs sharing the same first path segment (e.g. ``/products``)."""

    folder: str
    urls: List[str] = field(default_factory=list)
    count: int = 0
    topics: List[TopicCount] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "folder": self.folder,
            "urls": list(self.urls),
            "count": self.count,
            "topics": [t.to_dict() for t in self.topics],
        }
