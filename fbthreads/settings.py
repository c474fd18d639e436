from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FetcherSettings(BaseSettings):
    """
    Environment-driven settings for the thread fetcher.
    """

    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # ---- Source site ----
    site_origin: str = Field(default="https://www.flashback.org", alias="FBTHREADS_SITE_ORIGIN")

    # Pages are served as Latin-1; decoding happens before any text comparison.
    source_encoding: str = Field(default="iso-8859-1", alias="FBTHREADS_SOURCE_ENCODING")

    # Clock times in post headings are local to the site.
    site_timezone: str = Field(default="Europe/Stockholm", alias="FBTHREADS_SITE_TIMEZONE")

    # ---- HTTP ----
    request_timeout_sec: float = Field(default=15.0, alias="FBTHREADS_REQUEST_TIMEOUT_SEC")
    request_delay_sec: float = Field(default=0.0, alias="FBTHREADS_REQUEST_DELAY_SEC")

    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        alias="FBTHREADS_USER_AGENT",
    )

    # ---- Cache ----
    cache_ttl_sec: float = Field(default=600.0, alias="FBTHREADS_CACHE_TTL_SEC")

    # ---- Command line ----
    # Same batch size the infinite-scroll client asks for.
    default_pages: int = Field(default=3, alias="FBTHREADS_DEFAULT_PAGES")


def load_settings() -> FetcherSettings:
    return FetcherSettings()
