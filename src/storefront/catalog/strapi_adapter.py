"""Product catalog backed by Strapi's localized ``meals``, ``drinks`` and
``categories`` collections.

Strapi answers in the requested locale, so names come back already
translated. Entries may be v4-shaped (fields under ``attributes``, relations
under ``{data: ...}``) or v5-shaped (flat); the transforms accept both.
"""

import structlog

from storefront.catalog.models import Category, Drink, Ingredient, Meal
from storefront.catalog.port import ProductCatalog
from storefront.exceptions import StoreError
from storefront.utils.strapi import StrapiClient, attributes

logger = structlog.get_logger(__name__)

MEAL_POPULATE = {
    "populate[category][populate]": "*",
    "populate[ingredients][populate]": "*",
    "populate[image]": "*",
}


def _relation(value) -> dict:
    if isinstance(value, dict) and "data" in value:
        value = value["data"]
    if isinstance(value, list):
        value = value[0] if value else None
    return attributes(value) if isinstance(value, dict) else {}


def _relation_list(value) -> list[dict]:
    if isinstance(value, dict):
        value = value.get("data")
    return [entry for entry in value or [] if isinstance(entry, dict)]


def image_url(client: StrapiClient, attrs: dict) -> str:
    """Resolve an entry's image: a plain ``imageUrl`` wins over the media relation."""
    direct = attrs.get("imageUrl")
    if isinstance(direct, str) and direct.strip():
        return client.absolute_url(direct.strip())

    media = attrs.get("image")
    if isinstance(media, str):
        return client.absolute_url(media.strip())
    url = _relation(media).get("url") if isinstance(media, dict) else None
    if not url and isinstance(media, dict):
        url = media.get("url")
    return client.absolute_url(url) if url else ""


def transform_ingredient(entry: dict) -> Ingredient:
    attrs = attributes(entry)
    return Ingredient(
        id=str(entry.get("id")),
        name=attrs.get("name") or "",
        price=attrs.get("price") or 0.0,
        is_default=bool(attrs.get("isDefault")),
    )


def transform_meal(client: StrapiClient, entry: dict) -> Meal:
    attrs = attributes(entry)
    ingredients = [transform_ingredient(i) for i in _relation_list(attrs.get("ingredients"))]
    return Meal(
        id=str(entry.get("id")),
        category_slug=_relation(attrs.get("category")).get("slug") or "",
        name=attrs.get("name") or "",
        description=attrs.get("description") or "",
        price=attrs.get("price") or 0.0,
        image_url=image_url(client, attrs),
        calories=attrs.get("calories") or None,
        default_ingredients=[i for i in ingredients if i.is_default],
        optional_ingredients=[i for i in ingredients if not i.is_default],
        available=attrs.get("available", True) is not False,
    )


def transform_drink(client: StrapiClient, entry: dict) -> Drink:
    attrs = attributes(entry)
    return Drink(
        id=str(entry.get("id")),
        category_slug=attrs.get("categorySlug") or _relation(attrs.get("category")).get("slug") or "",
        name=attrs.get("name") or "",
        description=attrs.get("description") or "",
        price=attrs.get("price") or 0.0,
        image_url=image_url(client, attrs),
        volume=attrs.get("volume"),
        available=attrs.get("available", True) is not False,
    )


def transform_category(client: StrapiClient, entry: dict) -> Category:
    attrs = attributes(entry)
    return Category(
        id=str(entry.get("id")),
        slug=attrs.get("slug") or "",
        name=attrs.get("name") or "",
        description=attrs.get("description") or "",
        image_url=image_url(client, attrs),
    )


class StrapiCatalog(ProductCatalog):
    def __init__(self, client: StrapiClient) -> None:
        self.client = client

    async def _entries(self, endpoint: str, params: dict) -> list[dict]:
        body = await self.client.get(endpoint, params=params)
        data = (body or {}).get("data")
        return data if isinstance(data, list) else []

    async def _entry(self, endpoint: str, params: dict) -> dict | None:
        try:
            body = await self.client.get(endpoint, params=params)
        except StoreError as exc:
            if exc.status_code == 404:
                return None
            raise
        return (body or {}).get("data") or None

    async def get_meal(self, meal_id: str, locale: str = "en") -> Meal | None:
        entry = await self._entry(f"/meals/{meal_id}", {"locale": locale, **MEAL_POPULATE})
        return transform_meal(self.client, entry) if entry else None

    async def get_drink(self, drink_id: str, locale: str = "en") -> Drink | None:
        entry = await self._entry(f"/drinks/{drink_id}", {"locale": locale})
        return transform_drink(self.client, entry) if entry else None

    async def list_meals(self, locale: str = "en", category_slug: str | None = None) -> list[Meal]:
        params = {"locale": locale, **MEAL_POPULATE}
        if category_slug:
            params["filters[category][slug][$eq]"] = category_slug
        return [transform_meal(self.client, e) for e in await self._entries("/meals", params)]

    async def list_drinks(self, locale: str = "en") -> list[Drink]:
        return [transform_drink(self.client, e) for e in await self._entries("/drinks", {"locale": locale})]

    async def list_categories(self, locale: str = "en") -> list[Category]:
        entries = await self._entries("/categories", {"locale": locale, "sort": "order:asc"})
        return [transform_category(self.client, e) for e in entries]
