import pytest
from protean.integrations.pytest import DomainFixture

from storefront.catalog import set_catalog
from storefront.catalog.fake_adapter import FakeCatalog
from storefront.catalog.models import Drink, Ingredient, Meal
from storefront.media import set_media_library
from storefront.media.fake_adapter import FakeMediaLibrary
from storefront.order.store import set_order_store
from storefront.order.store.fake_adapter import FakeOrderStore


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def spicy_mayo():
    return Ingredient(id="spicy-mayo", name="Spicy Mayo", price=3.0)


@pytest.fixture()
def roll_a(spicy_mayo):
    return Meal(
        id="roll-a",
        category_slug="rolls",
        name="Roll A",
        price=42.0,
        image_url="http://media.test/roll-a.jpg",
        default_ingredients=[
            Ingredient(id="rice", name="Rice", is_default=True),
            Ingredient(id="nori", name="Nori", is_default=True),
        ],
        optional_ingredients=[
            spicy_mayo,
            Ingredient(id="avocado", name="Avocado", price=5.0),
        ],
    )


@pytest.fixture()
def soda():
    return Drink(id="soda", category_slug="drinks", name="Soda", price=12.5, volume="330ml")


@pytest.fixture()
def catalog(roll_a, soda):
    fake = FakeCatalog(meals=[roll_a], drinks=[soda])
    set_catalog(fake)
    return fake


@pytest.fixture()
def order_store():
    fake = FakeOrderStore()
    set_order_store(fake)
    return fake


@pytest.fixture()
def media():
    fake = FakeMediaLibrary()
    set_media_library(fake)
    return fake
