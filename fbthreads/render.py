"""
HTML fragment for the infinite-scroll reader.

The reader appends each response's `html` to what it already shows, so a
response starting at page 0 carries the thread heading and later ones don't.
"""

from __future__ import annotations

from html import escape
from typing import Any

from fbthreads.dates import format_date_and_time
from fbthreads.models import Page, Post, Thread
from fbthreads.thread_fetcher import thread_link


def _link(href: str, text: str) -> str:
    return f'<a href="{escape(href)}" target="_blank" rel="noreferrer">{text}</a>'


def render_post(post: Post) -> str:
    return (
        "\n<article>\n<header>\n"
        f"  {_link(post.author.profile_link, escape(post.author.username))}\n"
        f"  <time>{_link(post.permalink, format_date_and_time(post.timestamp))}</time>\n"
        "</header>\n"
        f"{post.body}\n"
        "</article>"
    )


def render_page(thread: Thread, page: Page, site_origin: str) -> str:
    number = f"{page.index + 1} / {thread.pages_available}"
    heading = f'\n<h2 class="page-number">{_link(thread_link(site_origin, thread.id, page.index), number)}</h2>'
    return heading + "".join(render_post(p) for p in page.posts)


def render_thread_html(thread: Thread, site_origin: str) -> str:
    parts: list[str] = []
    if thread.pages and thread.pages[0].index == 0:
        parts.append(f"\n<h1>{_link(thread_link(site_origin, thread.id), escape(thread.title))}</h1>")
    parts.extend(render_page(thread, page, site_origin) for page in thread.pages)
    return "".join(parts)


def thread_response(thread: Thread, site_origin: str) -> dict[str, Any]:
    """Response body the reader consumes: rendered markup plus the page count."""
    return {
        "html": render_thread_html(thread, site_origin),
        "pagesAvailable": thread.pages_available,
    }
