# src/services/aggregator.py

"""Fans out to every vendor feed and merges the tagged results."""

import asyncio
import logging

from src.config.settings import Settings
from src.models.product import Product, tag_product
from src.storage.response_cache import ResponseCache

logger = logging.getLogger("vendor_feed.aggregator")


class ProductAggregator:
    """Merges per-vendor product lists into one flat collection.

    The merged list is always the concatenation of each vendor's tagged
    list in configured vendor order.  A single failed vendor fails the
    whole aggregation; no partial list is ever returned.
    """

    def __init__(
        self,
        cache: ResponseCache,
        vendors: list[str] | None = None,
        parallel: bool | None = None,
    ) -> None:
        self.cache = cache
        self.vendors: list[str] = list(
            Settings.COMPANIES if vendors is None else vendors
        )
        self.parallel: bool = (
            Settings.PARALLEL_VENDOR_FETCH if parallel is None else parallel
        )

    async def _fetch_vendor(
        self,
        vendor: str,
        category: str,
        min_price: float,
        max_price: float | None,
    ) -> list[Product]:
        """Fetch one vendor through the cache and tag its products."""
        raw: list[Product] = await asyncio.to_thread(
            self.cache.get_or_fetch, vendor, category, min_price, max_price,
        )
        return [
            tag_product(product, index, vendor)
            for index, product in enumerate(raw)
        ]

    async def _collect(
        self,
        category: str,
        min_price: float,
        max_price: float | None,
    ) -> list[list[Product]]:
        if self.parallel:
            # gather keeps argument order, so batches stay in vendor order
            batches = await asyncio.gather(*(
                self._fetch_vendor(vendor, category, min_price, max_price)
                for vendor in self.vendors
            ))
            return list(batches)

        batches: list[list[Product]] = []
        for vendor in self.vendors:
            batches.append(
                await self._fetch_vendor(vendor, category, min_price, max_price)
            )
        return batches

    async def aggregate(
        self,
        category: str,
        min_price: float = 0.0,
        max_price: float | None = None,
    ) -> list[Product]:
        """Return every vendor's tagged products for the price window."""
        try:
            batches = await self._collect(category, min_price, max_price)
        except Exception:
            logger.error(
                "Aggregation failed for category '%s'", category, exc_info=True,
            )
            raise

        merged: list[Product] = []
        for batch in batches:
            merged.extend(batch)

        logger.info(
            "Aggregated %d products for '%s' from %d vendors",
            len(merged),
            category,
            len(self.vendors),
        )
        return merged
