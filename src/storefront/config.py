"""Runtime settings for the storefront, read from environment variables.

Values are read once and cached; call reset_settings() after changing the
environment (tests do this through monkeypatch).
"""

import os
from dataclasses import dataclass

_settings = None


@dataclass(frozen=True)
class Settings:
    strapi_url: str
    strapi_api_token: str
    strapi_timeout: float
    delivery_fee: float
    poll_interval: float
    default_locale: str
    catalog_adapter: str
    order_store_adapter: str
    media_adapter: str


def _load() -> Settings:
    return Settings(
        strapi_url=os.getenv("STRAPI_URL", "http://localhost:1337").rstrip("/"),
        strapi_api_token=os.getenv("STRAPI_API_TOKEN", ""),
        strapi_timeout=float(os.getenv("STRAPI_TIMEOUT", "10")),
        delivery_fee=float(os.getenv("DELIVERY_FEE", "15.0")),
        poll_interval=float(os.getenv("ORDER_POLL_INTERVAL", "10")),
        default_locale=os.getenv("DEFAULT_LOCALE", "en"),
        catalog_adapter=os.getenv("CATALOG_ADAPTER", "fake"),
        order_store_adapter=os.getenv("ORDER_STORE_ADAPTER", "fake"),
        media_adapter=os.getenv("MEDIA_ADAPTER", "fake"),
    )


def get_settings() -> Settings:
    """Return the cached settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = _load()
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
