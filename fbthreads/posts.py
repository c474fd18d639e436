from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from fbthreads.dates import parse_post_timestamp
from fbthreads.errors import MalformedPostError
from fbthreads.links import rewrite_links
from fbthreads.models import Author, Post

logger = logging.getLogger(__name__)

POST_CONTAINER_SELECTOR = "[data-postid]"
POST_ID_ATTR = "data-postid"
BODY_SELECTOR = ".post_message"
USERNAME_SELECTOR = ".post-user-username"
HEADING_SELECTOR = ".post-heading"
PERMALINK_SELECTOR = "[target='new']"


def parse_document(text: str) -> BeautifulSoup:
    """Parse page markup. lxml is lenient: broken markup never aborts parsing."""
    return BeautifulSoup(text, "lxml")


@dataclass(frozen=True)
class PostFragments:
    """The five source fragments a post needs, all known to be present."""

    post_id: str
    body: Tag
    username: str
    profile_href: str
    heading: str
    permalink_href: str


def collect_fragments(container: Tag) -> PostFragments:
    """
    Select the required fragments of one post container.

    Raises:
        MalformedPostError: any fragment is missing or empty
    """
    post_id = _attr(container, POST_ID_ATTR)
    if not post_id:
        raise MalformedPostError(None, "id")

    body = container.select_one(BODY_SELECTOR)
    if body is None:
        raise MalformedPostError(post_id, "body")

    username_el = container.select_one(USERNAME_SELECTOR)
    username = username_el.get_text(strip=True) if username_el is not None else ""
    if not username:
        raise MalformedPostError(post_id, "username")

    profile_href = _attr(username_el, "href")
    if not profile_href:
        raise MalformedPostError(post_id, "profile_link")

    heading_el = container.select_one(HEADING_SELECTOR)
    heading = heading_el.get_text().strip() if heading_el is not None else ""
    if not heading:
        raise MalformedPostError(post_id, "heading")

    permalink_href = _attr(container.select_one(PERMALINK_SELECTOR), "href")
    if not permalink_href:
        raise MalformedPostError(post_id, "permalink")

    return PostFragments(
        post_id=post_id,
        body=body,
        username=username,
        profile_href=profile_href,
        heading=heading,
        permalink_href=permalink_href,
    )


def build_post(fragments: PostFragments, now: datetime, site_origin: str) -> Post:
    """
    Turn validated fragments into a Post. Rewrites links of the body in place.

    Raises:
        MalformedPostError: the heading holds no readable date/time
    """
    try:
        timestamp = parse_post_timestamp(fragments.heading, now)
    except ValueError as e:
        raise MalformedPostError(fragments.post_id, "timestamp", str(e)) from e

    rewrite_links(fragments.body, site_origin)

    return Post(
        id=fragments.post_id,
        body=str(fragments.body),
        timestamp=timestamp,
        author=Author(
            username=fragments.username,
            profile_link=urljoin(site_origin, fragments.profile_href),
        ),
        permalink=urljoin(site_origin, fragments.permalink_href),
    )


def extract_posts(doc: Tag, now: datetime, site_origin: str) -> tuple[Post, ...]:
    """
    Extract every post of one listing page, in document order.

    Fails the whole page on the first malformed post.

    Raises:
        MalformedPostError
    """
    containers = doc.select(POST_CONTAINER_SELECTOR)
    fragments = [collect_fragments(c) for c in containers]
    posts = tuple(build_post(f, now, site_origin) for f in fragments)
    logger.debug("Extracted posts: count=%s", len(posts))
    return posts


def _attr(el: Optional[Tag], name: str) -> str:
    if el is None:
        return ""
    value = el.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()
