from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Author:
    username: str
    profile_link: str

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "link": self.profile_link}


@dataclass(frozen=True)
class Post:
    """One forum message, with links in `body` already rewritten."""

    id: str
    body: str
    timestamp: datetime
    author: Author
    permalink: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "body": self.body,
            # Milliseconds since the epoch, as the browser client expects.
            "timestamp": int(self.timestamp.timestamp() * 1000),
            "user": self.author.to_dict(),
            "link": self.permalink,
        }


@dataclass(frozen=True)
class Page:
    """Posts of one listing page, in document order. `index` is zero-based."""

    index: int
    posts: tuple[Post, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "posts": [p.to_dict() for p in self.posts]}


@dataclass(frozen=True)
class Thread:
    """
    A requested slice of a thread.

    - pages_available: page count reported by the source when fetched
    - pages: ascending by index, may start at any page
    """

    id: str
    title: str
    pages_available: int
    pages: tuple[Page, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "pagesAvailable": self.pages_available,
            "pages": [p.to_dict() for p in self.pages],
        }
