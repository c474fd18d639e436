from __future__ import annotations

from typing import Optional


class FetchThreadError(Exception):
    """Base class for every error raised while fetching a thread."""


class FetchError(FetchThreadError):
    """The source could not be reached or answered with a non-2xx status."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        status = f" status={status_code}" if status_code is not None else ""
        super().__init__(f"Failed to fetch url={url}{status}: {reason}")


class DecodeError(FetchThreadError):
    """The response body could not be decoded from the source encoding."""

    def __init__(self, url: str, encoding: str, reason: str):
        self.url = url
        self.encoding = encoding
        self.reason = reason
        super().__init__(f"Failed to decode url={url} as {encoding}: {reason}")


class MalformedPostError(FetchThreadError):
    """A post container is missing a required fragment or has an unreadable date."""

    def __init__(self, post_id: Optional[str], field: str, detail: str = ""):
        self.post_id = post_id
        self.field = field
        suffix = f": {detail}" if detail else ""
        super().__init__(f"Malformed post post_id={post_id} field={field}{suffix}")


class ThreadIdNotFoundError(FetchThreadError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Failed to find thread id in url={url}")


class TitleNotFoundError(FetchThreadError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Failed to find og:title in url={url}")


class PageCountUnavailable(FetchThreadError):
    """
    The page-count indicator is present but unreadable.

    Never reaches callers of fetch_thread: the aggregator falls back to a
    single page.
    """
