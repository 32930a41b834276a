"""Order store factory.

Provides get_order_store() / set_order_store() to swap implementations:
- FakeOrderStore for development and testing
- StrapiOrderStore when ORDER_STORE_ADAPTER=strapi
"""

from storefront.config import get_settings
from storefront.order.store.fake_adapter import FakeOrderStore
from storefront.order.store.port import OrderStore

_current_store: OrderStore | None = None


def get_order_store() -> OrderStore:
    """Return the current order store, building it from settings on first use."""
    global _current_store
    if _current_store is None:
        if get_settings().order_store_adapter == "strapi":
            from storefront.order.store.strapi_adapter import StrapiOrderStore
            from storefront.utils.strapi import get_strapi_client

            _current_store = StrapiOrderStore(get_strapi_client())
        else:
            _current_store = FakeOrderStore()
    return _current_store


def set_order_store(store: OrderStore) -> None:
    """Override the active order store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_order_store() -> None:
    global _current_store
    _current_store = None
