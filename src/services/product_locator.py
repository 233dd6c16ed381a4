# src/services/product_locator.py

"""Looks up a single product by its vendor-scoped id."""

import logging

from src.models.product import Product
from src.services.aggregator import ProductAggregator
from src.services.exceptions import ProductNotFound

logger = logging.getLogger("vendor_feed.locator")


class ProductLocator:
    """Finds a product by re-aggregating the whole category.

    The lookup always uses the unbounded price window ``(0, None)``,
    which is its own cache key: a listing query with other bounds does
    not warm it.
    """

    def __init__(self, aggregator: ProductAggregator) -> None:
        self.aggregator = aggregator

    async def find(self, category: str, product_id: str) -> Product:
        """Return the first product whose id matches, in vendor order."""
        products = await self.aggregator.aggregate(category, 0.0, None)
        for product in products:
            if product["id"] == product_id:
                logger.info(
                    "Found '%s' in '%s' from %s",
                    product_id,
                    category,
                    product["company"],
                )
                return product

        logger.info(
            "No product '%s' among %d in '%s'",
            product_id,
            len(products),
            category,
        )
        raise ProductNotFound(category, product_id)
