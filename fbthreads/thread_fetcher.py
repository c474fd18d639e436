from __future__ import annotations

import logging
import re
from datetime import datetime, tzinfo
from typing import Callable, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from fbthreads.cache import ExpiringCache, make_key
from fbthreads.errors import PageCountUnavailable, ThreadIdNotFoundError, TitleNotFoundError
from fbthreads.http_client import HttpClient
from fbthreads.models import Page, Post, Thread
from fbthreads.posts import extract_posts, parse_document

logger = logging.getLogger(__name__)

_PAGE_SUFFIX_RE = re.compile(r"p\d+$")
_THREAD_ID_RE = re.compile(r"/t(?P<thread_id>[^/]+?)(?:p\d+)?/?$")
_LAST_PAGE_HREF_RE = re.compile(r"p(?P<pages>\d+)$")


def normalize_thread_url(url: str) -> str:
    """Strip a trailing page suffix: .../t123p4 -> .../t123"""
    return _PAGE_SUFFIX_RE.sub("", url.strip())


def page_url(base_url: str, index: int) -> str:
    """URL of zero-based page `index`; the source numbers pages from 1."""
    return f"{base_url}p{index + 1}"


def thread_link(site_origin: str, thread_id: str, page_index: Optional[int] = None) -> str:
    base = f"{site_origin.rstrip('/')}/t{thread_id}"
    return base if page_index is None else page_url(base, page_index)


def parse_thread_id(url: str) -> str:
    """
    Raises:
        ThreadIdNotFoundError: the URL path has no /t<id> segment
    """
    m = _THREAD_ID_RE.search(urlparse(url).path)
    if not m:
        raise ThreadIdNotFoundError(url)
    return m.group("thread_id")


def parse_page_count(doc: BeautifulSoup) -> int:
    """
    Total page count of the thread, 1 when the page shows no indicator.

    Raises:
        PageCountUnavailable: an indicator exists but cannot be read
    """
    total = doc.select_one("[data-total-pages]")
    if total is not None:
        raw = str(total.get("data-total-pages", "")).strip()
        if not raw.isdigit() or int(raw) < 1:
            raise PageCountUnavailable(f"Unreadable data-total-pages={raw!r}")
        return int(raw)

    # Older layout: only the "last page" pagination link carries the count.
    last = doc.select_one(".last a[href]")
    if last is not None:
        m = _LAST_PAGE_HREF_RE.search(str(last["href"]).strip())
        if not m:
            raise PageCountUnavailable(f"Unreadable last page link={last['href']!r}")
        return int(m.group("pages"))

    return 1


def parse_title(doc: BeautifulSoup, url: str) -> str:
    """
    Raises:
        TitleNotFoundError: no og:title meta tag
    """
    og_title = doc.select_one("meta[property='og:title']")
    if og_title is None or og_title.get("content") is None:
        raise TitleNotFoundError(url)
    return str(og_title["content"]).strip()


class ThreadFetcher:
    """
    Fetches a range of pages of one thread and assembles a Thread.

    Flow per request:
    - normalize the URL and look up the thread-level cache
    - fetch the first requested page, read id / page count / title from it
    - fetch the remaining pages one at a time, in ascending order, each via
      the page-level cache
    - cache and return the Thread

    Any error aborts the request; nothing partial is cached or returned.
    """

    def __init__(
            self,
            http: HttpClient,
            cache: ExpiringCache,
            site_origin: str,
            tz: tzinfo,
            now: Optional[Callable[[], datetime]] = None,
    ):
        self.http = http
        self.cache = cache
        self.site_origin = site_origin.rstrip("/")
        self.tz = tz
        self._now = now or (lambda: datetime.now(self.tz))

    def fetch_thread(self, url: str, first_page: int = 0, max_pages: Optional[int] = None) -> Thread:
        """
        Fetch up to `max_pages` pages of a thread, starting at zero-based `first_page`.

        `max_pages=None` means every page up to the last one the source reports.

        Raises:
            ValueError: first_page < 0 or max_pages < 1
            FetchThreadError: any fetch, decode or parse failure
        """
        if first_page < 0:
            raise ValueError(f"first_page must be >= 0, got {first_page}")
        if max_pages is not None and max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {max_pages}")

        base_url = normalize_thread_url(url)
        first_url = page_url(base_url, first_page)

        cache_key = make_key("fetch_thread", base_url, first_page, max_pages)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("Thread cache hit: url=%s first_page=%s max_pages=%s", base_url, first_page, max_pages)
            return cached

        logger.info("Fetching thread: url=%s first_page=%s max_pages=%s", first_url, first_page, max_pages)
        doc = parse_document(self.http.get_text(first_url))

        thread_id = parse_thread_id(first_url)
        try:
            pages_available = parse_page_count(doc)
        except PageCountUnavailable as e:
            logger.warning("Page count unavailable, assuming 1: url=%s err=%s", first_url, e)
            pages_available = 1
        title = parse_title(doc, first_url)

        count = pages_available - first_page
        if max_pages is not None:
            count = min(count, max_pages)
        count = max(count, 0)
        logger.debug(
            "Thread metadata: id=%s pages_available=%s fetching=%s", thread_id, pages_available, count
        )

        pages: list[Page] = []
        for index in range(first_page, first_page + count):
            if index == first_page:
                posts = self.fetch_posts(first_url, doc=doc)
            else:
                posts = self.fetch_posts(page_url(base_url, index))
            pages.append(Page(index=index, posts=posts))

        thread = Thread(
            id=thread_id,
            title=title,
            pages_available=pages_available,
            pages=tuple(pages),
        )
        self.cache.put(cache_key, thread)
        return thread

    def fetch_posts(self, url: str, doc: Optional[BeautifulSoup] = None) -> tuple[Post, ...]:
        """
        Posts of one page, through the page-level cache.

        `doc` is an already parsed copy of the page; when given no request is made.

        Raises:
            FetchError / DecodeError / MalformedPostError
        """
        cache_key = make_key("fetch_posts", url)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Page cache hit: url=%s", url)
            return cached

        if doc is None:
            logger.info("Fetching page: url=%s", url)
            doc = parse_document(self.http.get_text(url))

        posts = extract_posts(doc, self._now(), self.site_origin)
        self.cache.put(cache_key, posts)
        return posts
