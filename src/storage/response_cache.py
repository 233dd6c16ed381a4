# src/storage/response_cache.py

"""In-memory TTL cache of raw vendor responses."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Protocol

from src.config.settings import Settings
from src.models.product import Product, format_price_bound

logger = logging.getLogger("vendor_feed.cache")


class ProductFetcher(Protocol):
    """Anything that can fetch one vendor's product list."""

    def fetch(
        self,
        vendor: str,
        category: str,
        min_price: float,
        max_price: float | None,
    ) -> list[Product]: ...


@dataclass
class CacheEntry:
    """A raw product list cached for one fetch key."""

    results: list[Product]
    timestamp: float


def build_cache_key(
    vendor: str,
    category: str,
    min_price: float,
    max_price: float | None,
) -> str:
    """Join the fetch parameters into a stable key.

    ``None`` for *max_price* renders as the unbounded sentinel, so the
    key for "no upper bound" never depends on float formatting.
    """
    return "-".join((
        vendor,
        category,
        format_price_bound(min_price),
        format_price_bound(max_price),
    ))


class ResponseCache:
    """Memoizes vendor fetches by ``(vendor, category, min, max)``.

    Entries live for ``ttl`` seconds and are evicted when looked up
    after expiry.  Failed fetches are never stored.  The entry map is
    guarded by a lock, but a lookup and the following store are not
    atomic: two concurrent misses for one key both go upstream.
    """

    def __init__(
        self,
        fetcher: ProductFetcher,
        ttl: float | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._entries: dict[str, CacheEntry] = {}
        self._ttl: float = Settings.CACHE_TTL if ttl is None else ttl
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> list[Product] | None:
        """Return the cached list for *key*, or ``None`` on miss/expiry."""
        now = time.time()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if now - entry.timestamp >= self._ttl:
                del self._entries[key]
                logger.debug("Evicted expired entry %s", key)
                return None
            return list(entry.results)

    def store(self, key: str, results: list[Product]) -> None:
        """Cache *results* under *key* with a fresh timestamp."""
        with self._lock:
            self._entries[key] = CacheEntry(
                results=list(results),
                timestamp=time.time(),
            )

    def get_or_fetch(
        self,
        vendor: str,
        category: str,
        min_price: float = 0.0,
        max_price: float | None = None,
    ) -> list[Product]:
        """Return cached results or fetch, store and return fresh ones."""
        key = build_cache_key(vendor, category, min_price, max_price)

        cached = self.get(key)
        if cached is not None:
            logger.info("Cache hit for %s (%d products)", key, len(cached))
            return cached

        logger.info("Cache miss for %s, fetching upstream", key)
        results = self._fetcher.fetch(vendor, category, min_price, max_price)
        self.store(key, results)
        return list(results)

    def clear(self) -> int:
        """Purge all cached entries.

        Returns the number of entries that were removed.
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cache manually purged (%d entries removed)", count)
        return count
