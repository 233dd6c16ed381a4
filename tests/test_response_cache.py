# tests/test_response_cache.py

"""Tests for the in-memory TTL response cache."""

import threading
import time
import unittest
from unittest.mock import patch

from src.services.exceptions import UpstreamError
from src.storage.response_cache import ResponseCache, build_cache_key


class _CountingFetcher:
    """Fetcher stub that records every call."""

    def __init__(self, fail: bool = False) -> None:
        self.calls: list[tuple[str, str, float, float | None]] = []
        self.fail = fail

    def fetch(
        self,
        vendor: str,
        category: str,
        min_price: float,
        max_price: float | None,
    ) -> list[dict[str, object]]:
        self.calls.append((vendor, category, min_price, max_price))
        if self.fail:
            raise UpstreamError(vendor, "HTTP 503", status=503)
        return [{"productName": f"{vendor} Laptop", "price": 100}]


class TestBuildCacheKey(unittest.TestCase):
    """Key construction from fetch parameters."""

    def test_joins_all_four_parameters(self) -> None:
        """Vendor, category and both bounds appear in order."""
        key = build_cache_key("AMZ", "Laptop", 10, 500)
        self.assertEqual(key, "AMZ-Laptop-10-500")

    def test_unbounded_max_uses_sentinel(self) -> None:
        """None renders as the stable Infinity sentinel."""
        key = build_cache_key("AMZ", "Laptop", 0, None)
        self.assertEqual(key, "AMZ-Laptop-0-Infinity")

    def test_whole_float_matches_int(self) -> None:
        """10.0 and 10 produce the same key."""
        self.assertEqual(
            build_cache_key("AMZ", "Phone", 10.0, 20.0),
            build_cache_key("AMZ", "Phone", 10, 20),
        )

    def test_price_bounds_distinguish_keys(self) -> None:
        """Different bounds give different keys."""
        self.assertNotEqual(
            build_cache_key("AMZ", "Phone", 0, None),
            build_cache_key("AMZ", "Phone", 0, 1000),
        )


class TestResponseCache(unittest.TestCase):
    """ResponseCache.get_or_fetch behaviour."""

    def setUp(self) -> None:
        self.fetcher = _CountingFetcher()
        self.cache = ResponseCache(self.fetcher, ttl=3600)

    # ── Hits & misses ────────────────────────────────────

    def test_second_call_is_served_from_cache(self) -> None:
        """Identical parameters inside the TTL fetch only once."""
        first = self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        second = self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.assertEqual(first, second)
        self.assertEqual(len(self.fetcher.calls), 1)

    def test_different_bounds_miss(self) -> None:
        """A new price window is a separate key."""
        self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.cache.get_or_fetch("AMZ", "Laptop", 0, 500)
        self.assertEqual(len(self.fetcher.calls), 2)

    def test_different_vendor_miss(self) -> None:
        """Each vendor has its own entry."""
        self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.cache.get_or_fetch("FLP", "Laptop", 0, None)
        self.assertEqual(
            [c[0] for c in self.fetcher.calls], ["AMZ", "FLP"]
        )

    def test_fetcher_receives_parameters(self) -> None:
        """Parameters are passed through unchanged."""
        self.cache.get_or_fetch("SNP", "Phone", 5, 50)
        self.assertEqual(
            self.fetcher.calls, [("SNP", "Phone", 5, 50)]
        )

    # ── TTL expiry ───────────────────────────────────────

    def test_expired_entry_is_refetched(self) -> None:
        """After the TTL elapses the fetcher runs again."""
        self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        future = time.time() + 3601
        with patch(
            "src.storage.response_cache.time.time",
            return_value=future,
        ):
            self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.assertEqual(len(self.fetcher.calls), 2)

    def test_entry_valid_just_before_ttl(self) -> None:
        """An entry younger than the TTL is still a hit."""
        self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        almost = time.time() + 3500
        with patch(
            "src.storage.response_cache.time.time",
            return_value=almost,
        ):
            self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.assertEqual(len(self.fetcher.calls), 1)

    def test_expired_entry_is_evicted(self) -> None:
        """Looking up an expired key removes it from the map."""
        self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        key = build_cache_key("AMZ", "Laptop", 0, None)
        future = time.time() + 4000
        with patch(
            "src.storage.response_cache.time.time",
            return_value=future,
        ):
            self.assertIsNone(self.cache.get(key))
        self.assertEqual(len(self.cache), 0)

    # ── Failures ─────────────────────────────────────────

    def test_failure_propagates_and_is_not_cached(self) -> None:
        """A failed fetch raises and leaves no entry behind."""
        cache = ResponseCache(_CountingFetcher(fail=True), ttl=3600)
        with self.assertRaises(UpstreamError):
            cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.assertEqual(len(cache), 0)

    def test_failure_is_retried_on_next_call(self) -> None:
        """No negative caching: the next call goes upstream again."""
        fetcher = _CountingFetcher(fail=True)
        cache = ResponseCache(fetcher, ttl=3600)
        for _ in range(2):
            with self.assertRaises(UpstreamError):
                cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.assertEqual(len(fetcher.calls), 2)

    # ── Isolation & housekeeping ─────────────────────────

    def test_returns_copy_not_reference(self) -> None:
        """Mutating a returned list does not corrupt the cache."""
        result = self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        result.append({"productName": "Extra"})
        again = self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.assertEqual(len(again), 1)

    def test_clear_returns_purged_count(self) -> None:
        """clear() empties the cache and reports the count."""
        self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.cache.get_or_fetch("FLP", "Laptop", 0, None)
        self.assertEqual(self.cache.clear(), 2)
        self.assertEqual(len(self.cache), 0)

    def test_clear_forces_refetch(self) -> None:
        """After clear() the next lookup misses."""
        self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.cache.clear()
        self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
        self.assertEqual(len(self.fetcher.calls), 2)

    def test_concurrent_access_is_safe(self) -> None:
        """Many threads hitting one key leave a single consistent entry."""
        errors: list[BaseException] = []

        def worker() -> None:
            try:
                for _ in range(50):
                    self.cache.get_or_fetch("AMZ", "Laptop", 0, None)
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        self.assertEqual(len(self.cache), 1)
        self.assertGreaterEqual(len(self.fetcher.calls), 1)


if __name__ == "__main__":
    unittest.main()
