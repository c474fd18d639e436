from __future__ import annotations

import logging
from urllib.parse import unquote, urlparse

from bs4 import Tag

logger = logging.getLogger(__name__)

REDIRECT_PATH = "/leave.php"
BACK_ARROW_SELECTOR = "i.glyphicon-arrow-left"
BACK_ARROW_TITLE = "Visa originalinlägg"


def unwrap_redirect(href: str, site_origin: str) -> str:
    """
    Return the target of a `/leave.php?u=<target>` wrapper, percent-decoded.

    Accepts the wrapper as a site-relative path or as an absolute URL on the
    site's own host. Any other href is returned unchanged.
    """
    parsed = urlparse(href)
    if parsed.path != REDIRECT_PATH:
        return href
    if parsed.netloc and parsed.netloc != urlparse(site_origin).netloc:
        return href

    # The target may carry its own unencoded "&"; keep everything after "u=".
    if not parsed.query.startswith("u="):
        return href
    return unquote(parsed.query[2:])


def absolutize(href: str, site_origin: str) -> str:
    # "//host/path" is protocol-relative, not site-relative.
    if href.startswith("/") and not href.startswith("//"):
        return site_origin.rstrip("/") + href
    return href


def is_external_link(href: str, site_origin: str) -> bool:
    parsed = urlparse(href)
    if not parsed.netloc:
        return False
    return parsed.netloc.lower() != urlparse(site_origin).netloc.lower()


def rewrite_links(fragment: Tag, site_origin: str) -> None:
    """
    Rewrite every href-bearing descendant of `fragment` in place.

    - unwrap redirect wrappers
    - absolutize site-relative hrefs
    - open external links in a new tab
    - give "back to quoted post" arrows a hover title
    - always rel="noreferrer"

    Links are never removed, only their attributes change.
    """
    links = fragment.select("[href]")
    for link in links:
        href = unwrap_redirect(link["href"].strip(), site_origin)
        href = absolutize(href, site_origin)
        link["href"] = href

        if is_external_link(href, site_origin):
            link["target"] = "_blank"

        if link.select_one(BACK_ARROW_SELECTOR) is not None:
            link["title"] = BACK_ARROW_TITLE

        link["rel"] = "noreferrer"

    logger.debug("Rewrote links: count=%s", len(links))
