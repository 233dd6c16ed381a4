# src/config/settings.py

"""Central configuration for the vendor_feed aggregation service."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str, default: str) -> list[str]:
    """Split a comma-separated environment variable into a list."""
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable ("1", "true", "yes")."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Central configuration for the vendor_feed aggregation service."""

    # --- Upstream ---
    API_URL: str = os.getenv("API_URL", "http://20.244.56.144/test")
    PRICE_PATH_TEMPLATE: str = os.getenv(
        "PRICE_PATH_TEMPLATE",
        "topminPrice-{min_price}&maxPrice-{max_price}",
    )
    AUTH_TOKEN: str = os.getenv("AUTH_TOKEN", "")
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "10"))
    UNBOUNDED_PRICE: str = "Infinity"   # Key/URL form of "no max price"

    # --- Vendors (iteration order is merge order) ---
    COMPANIES: list[str] = _env_list("COMPANIES", "AMZ,FLP,SNP,MYN,AZO")
    PARALLEL_VENDOR_FETCH: bool = _env_flag("PARALLEL_VENDOR_FETCH", True)

    # --- Caching ---
    CACHE_TTL: float = float(os.getenv("CACHE_TTL", "3600"))

    # --- Views ---
    MAX_PRODUCTS_PER_PAGE: int = 10

    # --- Server ---
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))

    # --- HTTP client ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
