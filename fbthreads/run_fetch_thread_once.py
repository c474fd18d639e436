from __future__ import annotations

import json
import logging
import sys
from typing import Optional
from zoneinfo import ZoneInfo

import click

from fbthreads.cache import ExpiringCache
from fbthreads.errors import FetchThreadError
from fbthreads.http_client import HttpClient, HttpConfig
from fbthreads.render import thread_response
from fbthreads.settings import FetcherSettings, load_settings
from fbthreads.thread_fetcher import ThreadFetcher

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)

logger = logging.getLogger(__name__)


def build_fetcher(s: FetcherSettings) -> ThreadFetcher:
    http = HttpClient(
        HttpConfig(
            timeout_sec=s.request_timeout_sec,
            delay_sec=s.request_delay_sec,
            user_agent=s.user_agent,
            encoding=s.source_encoding,
        )
    )

    return ThreadFetcher(
        http=http,
        cache=ExpiringCache(ttl_sec=s.cache_ttl_sec),
        site_origin=s.site_origin,
        tz=ZoneInfo(s.site_timezone),
    )


@click.command()
@click.argument("url")
@click.option("--start", default=0, type=click.IntRange(min=0), help="Zero-based first page")
@click.option("--pages", default=None, type=click.IntRange(min=1), help="Max pages to fetch")
@click.option("--html", "as_html", is_flag=True, help="Print the rendered reader response instead of JSON")
def main(url: str, start: int, pages: Optional[int], as_html: bool) -> None:
    """Fetch pages of a forum thread and print them."""
    if not url.strip():
        raise click.BadParameter("must not be empty", param_hint="URL")

    s = load_settings()
    fetcher = build_fetcher(s)
    if pages is None:
        pages = s.default_pages

    try:
        thread = fetcher.fetch_thread(url, first_page=start, max_pages=pages)
    except FetchThreadError as e:
        logger.error("Error fetching thread: url=%s err=%s", url, e)
        sys.exit(1)

    out = thread_response(thread, fetcher.site_origin) if as_html else thread.to_dict()
    click.echo(json.dumps(out, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
