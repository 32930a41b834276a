"""Product catalog port (abstract interface).

Read-only lookup of meals, drinks and categories for a locale. The payload
builder uses it to snapshot a meal's default ingredients at submission time.
"""

from abc import ABC, abstractmethod

from storefront.catalog.models import Category, Drink, Ingredient, Meal


class ProductCatalog(ABC):
    """Abstract product catalog interface."""

    @abstractmethod
    async def get_meal(self, meal_id: str, locale: str = "en") -> Meal | None:
        """Return a meal by id, or None when the catalog does not know it."""
        ...

    @abstractmethod
    async def get_drink(self, drink_id: str, locale: str = "en") -> Drink | None:
        ...

    @abstractmethod
    async def list_meals(self, locale: str = "en", category_slug: str | None = None) -> list[Meal]:
        ...

    @abstractmethod
    async def list_drinks(self, locale: str = "en") -> list[Drink]:
        ...

    @abstractmethod
    async def list_categories(self, locale: str = "en") -> list[Category]:
        ...

    async def default_ingredients(self, meal_id: str, locale: str = "en") -> list[Ingredient]:
        """Ingredients always included with a meal; empty for unknown meals."""
        meal = await self.get_meal(meal_id, locale)
        if meal is None:
            return []
        return list(meal.default_ingredients)
