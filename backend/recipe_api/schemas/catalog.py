"""
Recipe API — Catalog Schemas
==============================

What:  Models for the static category and recipe data.
How:   The same models parse the bundled JSON files (camelCase keys) and
       serialize API responses. Instances are frozen; catalog data never
       changes after load.
"""

from typing import List

from pydantic import ConfigDict, Field

from recipe_api.schemas.common import ApiModel


class CatalogModel(ApiModel):
    """Immutable camelCase model."""

    model_config = ConfigDict(frozen=True)


class Category(CatalogModel):
    id: str = Field(description="Category identifier (slug)")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="Short description")


class Ingredient(CatalogModel):
    name: str
    amount: float
    unit: str


class Nutrition(CatalogModel):
    calories: float
    protein: float
    carbohydrates: float
    fat: float


class Recipe(CatalogModel):
    """Full recipe, returned by GET /api/recipes/{id}."""
    id: int = Field(description="Numeric recipe identifier")
    name: str
    description: str
    category_id: str = Field(description="Soft reference to a Category id")
    cook_time: int = Field(description="Cooking time in minutes")
    calories: int
    image: str
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    nutrition: Nutrition


class RecipeSummary(CatalogModel):
    """
    What:  Compact recipe representation for GET /api/recipes.
    How:   `category` is the resolved category name, or "Unknown Category"
           when category_id points nowhere.
    """
    id: int
    name: str
    description: str
    category_id: str
    category: str
    cook_time: int
    calories: int
    image: str
