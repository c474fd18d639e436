"""Fetch and normalize paginated forum threads."""

from fbthreads.errors import (
    DecodeError,
    FetchError,
    FetchThreadError,
    MalformedPostError,
    PageCountUnavailable,
    ThreadIdNotFoundError,
    TitleNotFoundError,
)
from fbthreads.models import Author, Page, Post, Thread

__all__ = [
    "Author",
    "DecodeError",
    "FetchError",
    "FetchThreadError",
    "MalformedPostError",
    "Page",
    "PageCountUnavailable",
    "Post",
    "Thread",
    "ThreadIdNotFoundError",
    "TitleNotFoundError",
]
