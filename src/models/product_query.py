# src/models/product_query.py

"""Listing query parsed from raw request parameters."""

import math
from dataclasses import dataclass

from src.config.settings import Settings
from src.services.exceptions import ClientError

SORT_ORDERS = ("asc", "desc")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ClientError(
            f'Query parameter "{name}" must be an integer.'
        ) from None


def _parse_price(name: str, raw: str | None) -> float | None:
    """Parse a price bound; ``None`` or an infinite value means unbounded."""
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ClientError(
            f'Query parameter "{name}" must be a number.'
        ) from None
    if math.isnan(value):
        raise ClientError(f'Query parameter "{name}" must be a number.')
    if math.isinf(value):
        return None
    return value


@dataclass(frozen=True)
class ProductQuery:
    """A validated listing request for one category."""

    category: str
    n: int
    page: int = 1
    sort: str | None = None
    order: str = "asc"
    min_price: float = 0.0
    max_price: float | None = None

    @classmethod
    def from_params(
        cls,
        category: str,
        n: str | None,
        page: str | None = None,
        sort: str | None = None,
        order: str | None = None,
        min_price: str | None = None,
        max_price: str | None = None,
    ) -> "ProductQuery":
        """Validate raw string parameters into a query.

        Raises :class:`ClientError` when ``n`` is missing, outside
        ``1..MAX_PRODUCTS_PER_PAGE`` or any other parameter is malformed.
        """
        limit = Settings.MAX_PRODUCTS_PER_PAGE
        if n is None or not n.strip():
            raise ClientError(
                f'Query parameter "n" must be specified and cannot exceed {limit}.'
            )
        page_size = _parse_int("n", n)
        if page_size < 1 or page_size > limit:
            raise ClientError(
                f'Query parameter "n" must be specified and cannot exceed {limit}.'
            )

        page_number = 1 if page is None else _parse_int("page", page)

        sort_order = (order or "asc").lower()
        if sort_order not in SORT_ORDERS:
            raise ClientError('Query parameter "order" must be "asc" or "desc".')

        lower = _parse_price("minPrice", min_price)
        if lower is None and min_price is not None and min_price.strip():
            raise ClientError('Query parameter "minPrice" must be finite.')

        return cls(
            category=category,
            n=page_size,
            page=page_number,
            sort=sort or None,
            order=sort_order,
            min_price=0.0 if lower is None else lower,
            max_price=_parse_price("maxPrice", max_price),
        )
