# src/sources/vendor_client.py

"""HTTP client for the upstream vendor product feeds."""

import logging
import threading
import urllib.parse
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.product import Product, format_price_bound
from src.services.exceptions import UpstreamError


class VendorClient:
    """Fetches one vendor's top-products list for a category.

    Every call is a single attempt.  Transport failures, timeouts,
    non-2xx responses and payloads that are not a JSON list of
    objects all raise :class:`UpstreamError`.
    """

    def __init__(
        self,
        api_url: str | None = None,
        timeout: int | None = None,
    ) -> None:
        self.logger = logging.getLogger("vendor_feed.client")
        self.settings = Settings()
        self.api_url = (api_url or self.settings.API_URL).rstrip("/")
        self._request_timeout: int = (
            timeout if timeout is not None
            else self.settings.REQUEST_TIMEOUT
        )
        # curl handles are not shared between worker threads
        self._local = threading.local()

    @property
    def session(self) -> curl_requests.Session:
        """Return the calling thread's session, creating it on first use."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = curl_requests.Session(
                impersonate=self.settings.IMPERSONATE_BROWSER
            )
            self._local.session = session
        return session

    def _headers(self) -> dict[str, str]:
        headers = dict(self.settings.DEFAULT_HEADERS)
        if self.settings.AUTH_TOKEN:
            headers["Authorization"] = f"Bearer {self.settings.AUTH_TOKEN}"
        return headers

    def build_url(
        self,
        vendor: str,
        category: str,
        min_price: float,
        max_price: float | None,
    ) -> str:
        """Build the feed URL for one vendor/category/price window."""
        price_path = self.settings.PRICE_PATH_TEMPLATE.format(
            min_price=format_price_bound(min_price),
            max_price=format_price_bound(max_price),
        )
        return (
            f"{self.api_url}/companies/{urllib.parse.quote(vendor, safe='')}"
            f"/categories/{urllib.parse.quote(category, safe='')}"
            f"/products/{price_path}"
        )

    def fetch(
        self,
        vendor: str,
        category: str,
        min_price: float = 0.0,
        max_price: float | None = None,
    ) -> list[Product]:
        """GET the vendor feed and return its raw product records."""
        url = self.build_url(vendor, category, min_price, max_price)
        self.logger.debug("[%s] GET %s", vendor, url)

        try:
            resp = self.session.get(
                url,
                headers=self._headers(),
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.warning(
                "[%s] Request error: %s", vendor, exc, exc_info=True,
            )
            raise UpstreamError(vendor, f"request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            self.logger.warning(
                "[%s] HTTP %d from %s", vendor, resp.status_code, url,
            )
            raise UpstreamError(
                vendor, f"HTTP {resp.status_code}", status=resp.status_code,
            )

        try:
            payload: Any = resp.json()
        except ValueError as exc:
            raise UpstreamError(vendor, "response is not valid JSON") from exc

        return self._validate_payload(vendor, payload)

    @staticmethod
    def _validate_payload(vendor: str, payload: Any) -> list[Product]:
        """Ensure the body is a list of product objects."""
        if not isinstance(payload, list):
            raise UpstreamError(
                vendor,
                f"expected a product list, got {type(payload).__name__}",
            )
        for position, record in enumerate(payload):
            if not isinstance(record, dict):
                raise UpstreamError(
                    vendor,
                    f"record {position} is {type(record).__name__}, not an object",
                )
        return payload
