from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SEC = 10 * 60


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    value: T
    timestamp: float


def make_key(operation: str, *params: Any) -> str:
    """
    Build a cache key from an operation name and all of its parameters.

    Parameters are repr()'d so that e.g. None and "None" stay distinct.
    """
    return "|".join([operation, *(repr(p) for p in params)])


class ExpiringCache:
    """
    In-memory cache with a fixed time-to-live.

    - Lazy expiry: an entry older than the TTL is evicted when read
    - No capacity bound and no background sweeping
    - Safe to share between threads
    """

    def __init__(self, ttl_sec: float = DEFAULT_TTL_SEC, clock: Callable[[], float] = time.monotonic):
        self.ttl_sec = ttl_sec
        self._clock = clock
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if self._clock() - entry.timestamp > self.ttl_sec:
                del self._entries[key]
                logger.debug("Cache entry expired: key=%s", key)
                return None

            return entry.value

    def put(self, key: str, value: Any) -> None:
        entry = CacheEntry(value=value, timestamp=self._clock())
        with self._lock:
            self._entries[key] = entry

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
