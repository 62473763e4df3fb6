# ftc_dashboard/api/cache.py
import time
from typing import Any, Awaitable, Callable, Dict, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict

Fetcher = Callable[[str], Awaitable[Any]]
Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class CacheEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: Any
    timestamp: float  # Clock reading (ms) when the data was fetched


class ResponseCache:
    """Time-bounded memoization of GET responses, keyed by URL.

    Entries are never evicted; an entry older than the caller's TTL is
    refetched and replaced on the next ``get``. Failed fetches are not stored.
    """

    def __init__(self, fetcher: Fetcher, clock: Optional[Clock] = None):
        self._fetcher = fetcher
        self._clock = clock or monotonic_ms
        self._entries: Dict[str, CacheEntry] = {}

    async def get(self, url: str, ttl_ms: float) -> Any:
        entry = self._entries.get(url)
        if entry is not None and self._clock() - entry.timestamp < ttl_ms:
            logger.debug(f"Cache hit for {url}")
            return entry.data

        logger.debug(f"Cache miss for {url}")
        data = await self._fetcher(url)
        self._entries[url] = CacheEntry(data=data, timestamp=self._clock())
        return data

    def invalidate(self, url: Optional[str] = None) -> None:
        """Drops one cached URL, or everything when ``url`` is None."""
        if url is None:
            self._entries.clear()
        else:
            self._entries.pop(url, None)

    def __contains__(self, url: str) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)
