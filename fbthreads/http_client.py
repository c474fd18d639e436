from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

import requests

from fbthreads.errors import DecodeError, FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpConfig:
    timeout_sec: float
    delay_sec: float
    user_agent: str
    encoding: str = "iso-8859-1"


class HttpClient:
    """
    Thin HTTP client wrapper:
    - Timeout
    - Optional fixed delay between requests
    - Re-encodes legacy single-byte bodies into str

    No retries: a failed GET raises immediately and the caller decides.
    """

    def __init__(self, config: HttpConfig, session: Optional[requests.Session] = None):
        self._cfg = config
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": self._cfg.user_agent,
                "Accept-Language": "sv-SE,sv;q=0.9,en;q=0.8",
            }
        )

    @property
    def encoding(self) -> str:
        return self._cfg.encoding

    def get_bytes(self, url: str) -> bytes:
        """
        GET an URL and return the raw response body.

        Raises:
            FetchError: non-2xx responses and network errors
        """
        self._rate_limit()

        logger.info("HTTP GET: url=%s", url)
        try:
            resp = self._session.get(url, timeout=self._cfg.timeout_sec)
        except requests.RequestException as e:
            logger.error("HTTP GET failed: url=%s err=%s", url, e)
            raise FetchError(url, str(e)) from e

        if not 200 <= resp.status_code < 300:
            logger.error("HTTP GET returned error status: url=%s status=%s", url, resp.status_code)
            raise FetchError(url, resp.reason or "non-success status", status_code=resp.status_code)

        return resp.content

    def get_text(self, url: str) -> str:
        """
        GET an URL and decode its body from the configured source encoding.

        Raises:
            FetchError: non-2xx responses and network errors
            DecodeError: body not representable in the source encoding
        """
        body = self.get_bytes(url)
        try:
            return body.decode(self._cfg.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.error("Decoding failed: url=%s encoding=%s err=%s", url, self._cfg.encoding, e)
            raise DecodeError(url, self._cfg.encoding, str(e)) from e

    def _rate_limit(self) -> None:
        if self._cfg.delay_sec > 0:
            time.sleep(self._cfg.delay_sec)
