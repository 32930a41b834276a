import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Pin the environment and keep every collaborator on its in-memory adapter,
    whatever the developer's shell exports.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    for name in ("CATALOG_ADAPTER", "ORDER_STORE_ADAPTER", "MEDIA_ADAPTER"):
        os.environ[name] = "fake"


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(autouse=True)
def reset_collaborators():
    """Fresh settings and fake adapters for every test."""
    from storefront.catalog import reset_catalog
    from storefront.config import reset_settings
    from storefront.media import reset_media_library
    from storefront.order.store import reset_order_store
    from storefront.utils.logging import clear_context

    yield

    reset_settings()
    reset_catalog()
    reset_order_store()
    reset_media_library()
    clear_context()
