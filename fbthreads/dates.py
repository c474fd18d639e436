"""
Date handling for post headings.

The source shows recent posts as "Idag, 14:02" / "Igår, 23:15" and older ones
as "2024-01-02, 09:30". Everything here is a pure function of its inputs.
"""

from __future__ import annotations

import html
from datetime import datetime, timedelta

YESTERDAY_MARKER = "igår"
TODAY_MARKER = "idag"


def format_date(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%d")


def format_date_and_time(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%d, %H:%M")


def resolve_date_token(token: str, now: datetime) -> str:
    """
    Turn a relative date token into a literal YYYY-MM-DD date.

    Tokens that are neither "today" nor "yesterday" are returned unchanged.
    """
    # Entity-escaped text ("Ig&aring;r") compares the same as decoded text.
    normalized = html.unescape(token).strip().casefold()
    if normalized.startswith(YESTERDAY_MARKER):
        return format_date(now - timedelta(hours=24))
    if normalized.startswith(TODAY_MARKER):
        return format_date(now)
    return token.strip()


def parse_post_timestamp(heading: str, now: datetime) -> datetime:
    """
    Parse a post heading such as "Igår, 23:15\\n#3" into an absolute time.

    Only the text before the first line break is used. The result carries
    `now`'s tzinfo.

    Raises:
        ValueError: no comma separated date/time pair, or unparsable values
    """
    first_line = heading.strip().split("\n", 1)[0]
    if "," not in first_line:
        raise ValueError(f"Expected '<date>, <time>' in heading: {first_line!r}")

    date_token, time_token = (s.strip() for s in first_line.split(",", 1))
    date_text = resolve_date_token(date_token, now)

    parsed = datetime.strptime(f"{date_text} {time_token}", "%Y-%m-%d %H:%M")
    return parsed.replace(tzinfo=now.tzinfo)
