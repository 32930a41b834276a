"""Catalog read models, with names already resolved for the requested locale."""

from pydantic import BaseModel, Field


class Ingredient(BaseModel):
    id: str
    name: str
    price: float = Field(default=0.0, ge=0)
    is_default: bool = False


class Meal(BaseModel):
    id: str
    category_slug: str = ""
    name: str
    description: str = ""
    price: float = Field(ge=0)
    image_url: str = ""
    calories: int | None = None
    default_ingredients: list[Ingredient] = Field(default_factory=list)
    optional_ingredients: list[Ingredient] = Field(default_factory=list)
    available: bool = True


class Drink(BaseModel):
    id: str
    category_slug: str = ""
    name: str
    description: str = ""
    price: float = Field(ge=0)
    image_url: str = ""
    volume: str | None = None
    available: bool = True


class Category(BaseModel):
    id: str
    slug: str
    name: str
    description: str = ""
    image_url: str = ""
