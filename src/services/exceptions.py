# src/services/exceptions.py

"""Error taxonomy for the aggregation pipeline.

Each error carries the HTTP status the API layer answers with, so the
handlers in :mod:`src.api.app` map them without a lookup table.
"""


class CatalogError(Exception):
    """Base class for every error raised by the pipeline."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ClientError(CatalogError):
    """The caller sent a malformed or out-of-range query."""

    status_code = 400


class ProductNotFound(CatalogError):
    """No vendor returned a product with the requested id."""

    status_code = 404

    def __init__(self, category: str, product_id: str) -> None:
        self.category = category
        self.product_id = product_id
        super().__init__(
            f"Product '{product_id}' not found in category '{category}'"
        )


class UpstreamError(CatalogError):
    """A vendor feed could not be fetched or returned unusable data."""

    status_code = 500

    def __init__(
        self,
        vendor: str,
        message: str,
        status: int | None = None,
    ) -> None:
        self.vendor = vendor
        self.status = status
        super().__init__(f"[{vendor}] {message}")
