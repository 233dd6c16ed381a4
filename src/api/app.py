# src/api/app.py

"""FastAPI application exposing the aggregated product catalog."""

import logging
from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import PlainTextResponse

from src.models.product import Product
from src.models.product_query import ProductQuery
from src.services.catalog_service import CatalogService
from src.services.exceptions import CatalogError

logger = logging.getLogger("vendor_feed.api")

INTERNAL_ERROR_TEXT = "Internal Server Error"


def get_catalog(request: Request) -> CatalogService:
    """Return the process-wide catalog service stored on the app."""
    catalog: CatalogService = request.app.state.catalog
    return catalog


async def handle_catalog_error(request: Request, exc: Exception) -> PlainTextResponse:
    """Map pipeline errors to terse plain-text responses."""
    status = getattr(exc, "status_code", 500)
    if status >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc,
            exc_info=exc,
        )
        return PlainTextResponse(INTERNAL_ERROR_TEXT, status_code=status)

    logger.warning(
        "%s %s rejected (%d): %s", request.method, request.url.path, status, exc,
    )
    if status == 404:
        return PlainTextResponse("Product not found", status_code=status)
    return PlainTextResponse(str(exc), status_code=status)


async def handle_unexpected_error(request: Request, exc: Exception) -> PlainTextResponse:
    """Answer any non-pipeline exception with a terse 500."""
    logger.error(
        "Unexpected error on %s %s: %s", request.method, request.url.path, exc,
        exc_info=exc,
    )
    return PlainTextResponse(INTERNAL_ERROR_TEXT, status_code=500)


def create_app(catalog: CatalogService | None = None) -> FastAPI:
    """Build the application around *catalog* (a fresh one by default)."""
    app = FastAPI(title="vendor_feed")
    app.state.catalog = catalog or CatalogService()
    app.add_exception_handler(CatalogError, handle_catalog_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.get("/health")
    async def health(
        catalog: CatalogService = Depends(get_catalog),
    ) -> dict[str, Any]:
        return {
            "status": "ok",
            "vendors": catalog.vendors,
            "cache_entries": len(catalog.cache),
        }

    @app.get("/categories/{category}/products", response_model=None)
    async def list_products(
        category: str,
        n: str | None = Query(None),
        page: str | None = Query(None),
        sort: str | None = Query(None),
        order: str | None = Query(None),
        min_price: str | None = Query(None, alias="minPrice"),
        max_price: str | None = Query(None, alias="maxPrice"),
        catalog: CatalogService = Depends(get_catalog),
    ) -> list[Product]:
        """List one page of products merged from every vendor."""
        query = ProductQuery.from_params(
            category,
            n=n,
            page=page,
            sort=sort,
            order=order,
            min_price=min_price,
            max_price=max_price,
        )
        return await catalog.list_products(query)

    # Product names may contain "/", so the id spans the rest of the path
    @app.get(
        "/categories/{category}/products/{product_id:path}",
        response_model=None,
    )
    async def get_product(
        category: str,
        product_id: str,
        catalog: CatalogService = Depends(get_catalog),
    ) -> Product:
        """Return one product by its vendor-scoped id."""
        return await catalog.get_product(category, product_id)

    logger.info("API ready for vendors %s", ", ".join(app.state.catalog.vendors))
    return app
