# src/models/product.py

"""Product record helpers for inter-module data flow.

Vendor feeds are schema-less, so a product stays an open ``dict`` of
whatever the vendor sent.  Tagging adds two guaranteed keys, ``id``
and ``company``, on a fresh copy; the raw record is never modified.
"""

from typing import Any

from src.config.settings import Settings

Product = dict[str, Any]


def make_product_id(product: Product, index: int) -> str:
    """Build the vendor-scoped id ``"<productName>-<index>"``."""
    return f"{product.get('productName')}-{index}"


def tag_product(product: Product, index: int, company: str) -> Product:
    """Return a copy of *product* with ``id`` and ``company`` injected."""
    return {
        **product,
        "id": make_product_id(product, index),
        "company": company,
    }


def format_price_bound(value: float | None) -> str:
    """Render a price bound in its literal query form.

    Whole numbers drop the decimal part (``0``, ``100``), fractional
    values keep it (``12.5``) and ``None`` renders as the unbounded
    sentinel.
    """
    if value is None:
        return Settings.UNBOUNDED_PRICE
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
