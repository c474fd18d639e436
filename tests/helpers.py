from __future__ import annotations

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from fbthreads.errors import FetchError
from fbthreads.http_client import HttpClient, HttpConfig

SITE = "https://www.flashback.org"
TZ = ZoneInfo("Europe/Stockholm")
NOW = datetime(2024, 3, 15, 10, 0, tzinfo=TZ)


def post_html(
        post_id: str,
        username: Optional[str] = "kalle",
        heading: str = "Idag, 09:15",
        body: str = "Hej",
) -> str:
    user = (
        f'<a class="post-user-username" href="/u{post_id}">{username}</a>'
        if username is not None
        else ""
    )
    return f"""
    <div class="post" data-postid="{post_id}">
      <div class="post-heading">
        {heading}
        <a href="/p{post_id}" target="new">#{post_id}</a>
      </div>
      {user}
      <div class="post_message" id="post_message_{post_id}">{body}</div>
    </div>
    """


def page_html(posts: list[str], total_pages: Optional[int] = 5, title: Optional[str] = "Testtråd") -> str:
    og = f'<meta property="og:title" content="{title}">' if title is not None else ""
    total = f'<div data-total-pages="{total_pages}"></div>' if total_pages is not None else ""
    return f"""
    <html><head>{og}</head><body>
      {total}
      {''.join(posts)}
    </body></html>
    """


class DummyHttp(HttpClient):
    """Serves canned pages keyed by URL and records every request."""

    def __init__(self, pages: dict[str, str]):
        super().__init__(HttpConfig(timeout_sec=1.0, delay_sec=0.0, user_agent="test"))
        self.pages = pages
        self.requested: list[str] = []

    def get_bytes(self, url: str) -> bytes:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(url, "Not Found", status_code=404)
        return self.pages[url].encode("iso-8859-1")


class FakeClock:
    def __init__(self, t: float = 1000.0):
        self.t = t

    def __call__(self) -> float:
        return self.t
