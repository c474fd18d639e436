from __future__ import annotations

from bs4 import BeautifulSoup

from fbthreads.links import BACK_ARROW_TITLE, absolutize, rewrite_links, unwrap_redirect
from helpers import SITE


def _fragment(inner: str):
    soup = BeautifulSoup(f'<div class="post_message">{inner}</div>', "lxml")
    return soup.select_one(".post_message")


def test_unwrap_redirect_decodes_target():
    assert unwrap_redirect("/leave.php?u=https%3A%2F%2Fexample.com", SITE) == "https://example.com"


def test_unwrap_redirect_absolute_on_own_host():
    href = "https://www.flashback.org/leave.php?u=https%3A%2F%2Fexample.com%2Fa%3Fb%3D1"
    assert unwrap_redirect(href, SITE) == "https://example.com/a?b=1"


def test_unwrap_redirect_ignores_other_hosts():
    href = "https://example.com/leave.php?u=https%3A%2F%2Fevil.com"
    assert unwrap_redirect(href, SITE) == href


def test_absolutize_only_site_relative():
    assert absolutize("/u123", SITE) == "https://www.flashback.org/u123"
    assert absolutize("//cdn.example.com/x.png", SITE) == "//cdn.example.com/x.png"
    assert absolutize("https://example.com", SITE) == "https://example.com"


def test_rewrite_links_unwraps_and_annotates_external():
    frag = _fragment('<a href="/leave.php?u=https%3A%2F%2Fexample.com">ext</a>')
    rewrite_links(frag, SITE)

    a = frag.select_one("a")
    assert a["href"] == "https://example.com"
    assert a["target"] == "_blank"
    assert a["rel"] == "noreferrer"


def test_rewrite_links_absolutizes_internal_without_target():
    frag = _fragment('<a href="/t123p2">tråd</a>')
    rewrite_links(frag, SITE)

    a = frag.select_one("a")
    assert a["href"] == "https://www.flashback.org/t123p2"
    assert not a.has_attr("target")


def test_rewrite_links_titles_back_arrow():
    frag = _fragment(
        '<a href="/sp99#p99"><i class="fa glyphicon glyphicon-arrow-left"></i></a>'
        '<a href="/sp98">no arrow</a>'
    )
    rewrite_links(frag, SITE)

    arrow, plain = frag.select("a")
    assert arrow["title"] == BACK_ARROW_TITLE
    assert not plain.has_attr("title")


def test_rewrite_links_never_removes_links():
    frag = _fragment('<a href="/a">1</a><a href="https://x.org">2</a><a>no href</a>')
    rewrite_links(frag, SITE)
    assert len(frag.select("a")) == 3


def test_rewrite_links_is_idempotent_on_absolute_links():
    frag = _fragment('<a href="https://example.com/page" rel="noreferrer">x</a>')
    rewrite_links(frag, SITE)
    once = str(frag)

    again = BeautifulSoup(once, "lxml").select_one(".post_message")
    rewrite_links(again, SITE)
    a = again.select_one("a")

    assert a["href"] == "https://example.com/page"
    assert a["rel"] == "noreferrer"
    assert str(again) == once


def test_unwrap_redirect_keeps_unencoded_ampersands_in_target():
    assert unwrap_redirect("/leave.php?u=https://ex.com/watch?v=1&t=30", SITE) == "https://ex.com/watch?v=1&t=30"


def test_rewrite_links_keeps_full_target_query():
    frag = _fragment('<a href="/leave.php?u=https://ex.com/watch?v=1&amp;t=30">video</a>')
    rewrite_links(frag, SITE)
    assert frag.select_one("a")["href"] == "https://ex.com/watch?v=1&t=30"
