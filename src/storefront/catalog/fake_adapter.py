"""In-memory product catalog for development and testing.

Holds whatever meals, drinks and categories it was seeded with and ignores the
locale. Calls are recorded so tests can assert on lookups, and it can be
configured to fail like an unreachable CMS.
"""

from storefront.catalog.models import Category, Drink, Meal
from storefront.catalog.port import ProductCatalog
from storefront.exceptions import StoreError


class FakeCatalog(ProductCatalog):
    """Seeded in-memory catalog."""

    def __init__(self, meals=None, drinks=None, categories=None) -> None:
        self.meals: dict[str, Meal] = {m.id: m for m in meals or []}
        self.drinks: dict[str, Drink] = {d.id: d for d in drinks or []}
        self.categories: list[Category] = list(categories or [])
        self.calls: list[dict] = []
        self.should_fail: bool = False

    def configure(self, should_fail=False) -> None:
        self.should_fail = should_fail

    def seed(self, *products) -> None:
        for product in products:
            if isinstance(product, Meal):
                self.meals[product.id] = product
            elif isinstance(product, Drink):
                self.drinks[product.id] = product
            elif isinstance(product, Category):
                self.categories.append(product)
            else:
                raise TypeError(f"Cannot seed catalog with {type(product).__name__}")

    async def get_meal(self, meal_id: str, locale: str = "en") -> Meal | None:
        self.calls.append({"method": "get_meal", "meal_id": meal_id, "locale": locale})
        if self.should_fail:
            raise StoreError("Catalog unavailable", status_code=503)
        return self.meals.get(str(meal_id))

    async def get_drink(self, drink_id: str, locale: str = "en") -> Drink | None:
        self.calls.append({"method": "get_drink", "drink_id": drink_id, "locale": locale})
        if self.should_fail:
            raise StoreError("Catalog unavailable", status_code=503)
        return self.drinks.get(str(drink_id))

    async def list_meals(self, locale: str = "en", category_slug: str | None = None) -> list[Meal]:
        meals = list(self.meals.values())
        if category_slug:
            meals = [m for m in meals if m.category_slug == category_slug]
        return meals

    async def list_drinks(self, locale: str = "en") -> list[Drink]:
        return list(self.drinks.values())

    async def list_categories(self, locale: str = "en") -> list[Category]:
        return list(self.categories)
