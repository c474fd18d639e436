from __future__ import annotations

from datetime import datetime

from fbthreads.models import Author, Page, Post, Thread
from fbthreads.render import render_thread_html, thread_response
from helpers import SITE, TZ


def _thread(first_index: int) -> Thread:
    post = Post(
        id="7",
        body='<div class="post_message">Hej</div>',
        timestamp=datetime(2024, 3, 14, 23, 15, tzinfo=TZ),
        author=Author(username="<kalle>", profile_link="https://www.flashback.org/u7"),
        permalink="https://www.flashback.org/p7",
    )
    return Thread(
        id="123",
        title="Tråd & titel",
        pages_available=4,
        pages=(Page(index=first_index, posts=(post,)),),
    )


def test_first_page_response_has_title_heading():
    html = render_thread_html(_thread(0), SITE)

    assert '<h1><a href="https://www.flashback.org/t123"' in html
    assert "Tråd &amp; titel" in html
    assert '<h2 class="page-number"><a href="https://www.flashback.org/t123p1"' in html
    assert ">1 / 4</a></h2>" in html


def test_later_page_response_has_no_title_heading():
    html = render_thread_html(_thread(2), SITE)

    assert "<h1>" not in html
    assert ">3 / 4</a></h2>" in html


def test_post_is_rendered_with_escaped_author_and_time():
    html = render_thread_html(_thread(0), SITE)

    assert "&lt;kalle&gt;" in html
    assert '<a href="https://www.flashback.org/p7" target="_blank" rel="noreferrer">2024-03-14, 23:15</a>' in html
    assert '<div class="post_message">Hej</div>' in html


def test_thread_response_carries_page_count():
    response = thread_response(_thread(0), SITE)
    assert response["pagesAvailable"] == 4
    assert response["html"].startswith("\n<h1>")


def test_empty_thread_renders_nothing():
    thread = Thread(id="1", title="t", pages_available=1, pages=())
    assert render_thread_html(thread, SITE) == ""
