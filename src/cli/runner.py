# src/cli/runner.py

"""Headless CLI runner: reuses the catalog service without HTTP."""

import json
import logging
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from src.models.product import Product
from src.models.product_query import ProductQuery
from src.services.catalog_service import CatalogService
from src.services.exceptions import CatalogError, ProductNotFound

logger = logging.getLogger("vendor_feed.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

_PRICE_FIELDS = ("price", "Price")


def _format_price(product: Product) -> str:
    for field in _PRICE_FIELDS:
        value: Any = product.get(field)
        if isinstance(value, (int, float)):
            return f"{value:,.2f}"
    return "N/A"


def _print_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout, in page order."""
    table = Table(
        title="Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Id", max_width=40)
    table.add_column("Name", max_width=50)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Rating", justify="center")
    table.add_column("Company", style="magenta")

    for idx, p in enumerate(products, 1):
        table.add_row(
            str(idx),
            str(p.get("id", "")),
            str(p.get("productName", ""))[:50],
            _format_price(p),
            str(p.get("rating", "—")),
            str(p.get("company", "")),
        )

    Console().print(table)


async def cli_list(
    category: str,
    n: str | None,
    page: str | None = None,
    sort: str | None = None,
    order: str | None = None,
    min_price: str | None = None,
    max_price: str | None = None,
    output_format: str = "json",
    catalog: CatalogService | None = None,
) -> int:
    """Print one listing page; exit code 0=ok, 1=empty, 2=error."""
    catalog = catalog or CatalogService()
    try:
        query = ProductQuery.from_params(
            category,
            n=n,
            page=page,
            sort=sort,
            order=order,
            min_price=min_price,
            max_price=max_price,
        )
        _err.print(
            f"[bold]Listing:[/bold] {category}  "
            f"[dim]vendors={', '.join(catalog.vendors)}[/dim]"
        )
        products = await catalog.list_products(query)
    except CatalogError as exc:
        logger.error("CLI listing failed: %s", exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return 2

    if not products:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    _err.print(f"[green]✓ {len(products)} products (page {query.page})[/green]")
    if output_format == "json":
        json.dump(products, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    else:
        _print_table(products)
    return 0


async def cli_find(
    category: str,
    product_id: str,
    output_format: str = "json",
    catalog: CatalogService | None = None,
) -> int:
    """Print one product by id; exit code 0=found, 1=absent, 2=error."""
    catalog = catalog or CatalogService()
    try:
        product = await catalog.get_product(category, product_id)
    except ProductNotFound:
        _err.print(f"[yellow]Product not found: {product_id}[/yellow]")
        return 1
    except CatalogError as exc:
        logger.error("CLI lookup failed: %s", exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return 2

    if output_format == "table":
        _print_table([product])
    else:
        json.dump(product, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    return 0
