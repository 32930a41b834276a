"""Product catalog factory.

Provides get_catalog() / set_catalog() to swap implementations:
- FakeCatalog for development and testing
- StrapiCatalog when CATALOG_ADAPTER=strapi
"""

from storefront.catalog.fake_adapter import FakeCatalog
from storefront.catalog.port import ProductCatalog
from storefront.config import get_settings

_current_catalog: ProductCatalog | None = None


def get_catalog() -> ProductCatalog:
    """Return the current catalog. Defaults to FakeCatalog."""
    global _current_catalog
    if _current_catalog is None:
        if get_settings().catalog_adapter == "strapi":
            from storefront.catalog.strapi_adapter import StrapiCatalog
            from storefront.utils.strapi import get_strapi_client

            _current_catalog = StrapiCatalog(get_strapi_client())
        else:
            _current_catalog = FakeCatalog()
    return _current_catalog


def set_catalog(catalog: ProductCatalog) -> None:
    """Override the active catalog (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    global _current_catalog
    _current_catalog = None
