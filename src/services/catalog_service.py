# src/services/catalog_service.py

"""Wires the client, cache, aggregator and views into one service."""

import logging

from src.filters.view_builder import ViewBuilder
from src.models.product import Product
from src.models.product_query import ProductQuery
from src.services.aggregator import ProductAggregator
from src.services.product_locator import ProductLocator
from src.sources.vendor_client import VendorClient
from src.storage.response_cache import ProductFetcher, ResponseCache

logger = logging.getLogger("vendor_feed.catalog")


class CatalogService:
    """Entry point shared by the HTTP API and the headless CLI."""

    def __init__(
        self,
        fetcher: ProductFetcher | None = None,
        vendors: list[str] | None = None,
        cache_ttl: float | None = None,
        parallel: bool | None = None,
    ) -> None:
        self.cache = ResponseCache(fetcher or VendorClient(), ttl=cache_ttl)
        self.aggregator = ProductAggregator(
            self.cache, vendors=vendors, parallel=parallel,
        )
        self.locator = ProductLocator(self.aggregator)

    @property
    def vendors(self) -> list[str]:
        return self.aggregator.vendors

    async def list_products(self, query: ProductQuery) -> list[Product]:
        """Aggregate the category, then sort and paginate it."""
        logger.info("Listing %s", query)
        products = await self.aggregator.aggregate(
            query.category, query.min_price, query.max_price,
        )
        return ViewBuilder.build_page(
            products,
            n=query.n,
            page=query.page,
            sort=query.sort,
            order=query.order,
        )

    async def get_product(self, category: str, product_id: str) -> Product:
        """Locate one product by id across every vendor."""
        return await self.locator.find(category, product_id)
