"""Media library factory.

Provides get_media_library() / set_media_library() to swap implementations:
- FakeMediaLibrary for development and testing
- StrapiMediaLibrary when MEDIA_ADAPTER=strapi
"""

from storefront.config import get_settings
from storefront.media.fake_adapter import FakeMediaLibrary
from storefront.media.port import MediaLibrary

_current_library: MediaLibrary | None = None


def get_media_library() -> MediaLibrary:
    global _current_library
    if _current_library is None:
        if get_settings().media_adapter == "strapi":
            from storefront.media.strapi_adapter import StrapiMediaLibrary
            from storefront.utils.strapi import get_strapi_client

            _current_library = StrapiMediaLibrary(get_strapi_client())
        else:
            _current_library = FakeMediaLibrary()
    return _current_library


def set_media_library(library: MediaLibrary) -> None:
    """Override the active media library (useful for tests)."""
    global _current_library
    _current_library = library


def reset_media_library() -> None:
    global _current_library
    _current_library = None
