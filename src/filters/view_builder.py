# src/filters/view_builder.py

"""Sorting and pagination over a merged product list."""

import functools
import logging
from collections.abc import Callable
from typing import Any

from src.config.settings import Settings
from src.models.product import Product
from src.services.exceptions import ClientError

logger = logging.getLogger("vendor_feed.filters")


def _greater(left: Any, right: Any) -> bool:
    """``left > right``, treating incomparable values as not greater."""
    try:
        return bool(left > right)
    except TypeError:
        return False


def _less(left: Any, right: Any) -> bool:
    try:
        return bool(left < right)
    except TypeError:
        return False


def make_comparator(
    field: str,
    order: str = "asc",
) -> Callable[[Product, Product], int]:
    """Build a three-way comparator on *field* that never returns 0.

    Ascending puts ``a`` after ``b`` only when ``a[field] > b[field]``
    and before it otherwise; descending mirrors that with ``<``.  Equal
    keys therefore compare as "a before b" in both directions and have
    no guaranteed relative order after sorting.
    """
    descending = order == "desc"

    def compare(a: Product, b: Product) -> int:
        left, right = a.get(field), b.get(field)
        if descending:
            return 1 if _less(left, right) else -1
        return 1 if _greater(left, right) else -1

    return compare


class ViewBuilder:
    """Turns a merged product list into the page returned to the caller."""

    @staticmethod
    def validate_page_size(n: int | None) -> int:
        """Reject a missing page size or one outside ``1..MAX``."""
        limit = Settings.MAX_PRODUCTS_PER_PAGE
        if n is None or n < 1 or n > limit:
            raise ClientError(
                f'Query parameter "n" must be specified and cannot exceed {limit}.'
            )
        return n

    @staticmethod
    def sort_products(
        products: list[Product],
        field: str,
        order: str = "asc",
    ) -> list[Product]:
        """Return a sorted copy using :func:`make_comparator`."""
        return sorted(
            products,
            key=functools.cmp_to_key(make_comparator(field, order)),
        )

    @staticmethod
    def paginate(
        products: list[Product],
        n: int,
        page: int,
    ) -> list[Product]:
        """Slice the ``[(page-1)*n, page*n)`` window; out of range is empty."""
        if page < 1:
            return []
        start = (page - 1) * n
        return products[start:start + n]

    @classmethod
    def build_page(
        cls,
        products: list[Product],
        n: int | None,
        page: int = 1,
        sort: str | None = None,
        order: str = "asc",
    ) -> list[Product]:
        """Validate, optionally sort, then paginate *products*."""
        page_size = cls.validate_page_size(n)
        view = products
        if sort:
            view = cls.sort_products(products, sort, order)
        window = cls.paginate(view, page_size, page)
        logger.debug(
            "Built page %d (n=%d, sort=%s %s): %d of %d products",
            page,
            page_size,
            sort,
            order,
            len(window),
            len(products),
        )
        return window
