"""
Recipe API — Catalog Service
==============================

What:  Read-only lookups over the static category and recipe collections.
How:   Both collections are loaded once (CatalogService.load reads the JSON
       files with aiofiles) and kept as immutable lists plus id indexes.
       Every request reads the same instance without locking.
Who:   Constructed in the lifespan; used by the recipes and categories routers.

Recipes reference categories by id only. A recipe whose category_id is not
in the catalog still lists fine, with UNKNOWN_CATEGORY as its category name.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import aiofiles

from recipe_api.schemas.catalog import Category, Recipe, RecipeSummary

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "Unknown Category"

CATEGORIES_FILE = "categories.json"
RECIPES_FILE = "recipes.json"


async def _read_json_list(path: Path) -> list:
    async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
        content = await f.read()
    data = json.loads(content)
    if not isinstance(data, list):
        raise ValueError(f"{path.name} must contain a JSON array")
    return data


class CatalogService:
    """
    In-memory catalog.

    Operations:
        list_categories()      All categories, load order
        get_category_by_id()   Category or None
        get_category_name()    Name, or "Unknown Category"
        list_recipes()         Summaries, optionally filtered
        get_recipe_by_id()     Full recipe or None
    """

    def __init__(self, categories: Iterable[Category], recipes: Iterable[Recipe]):
        self._categories: List[Category] = list(categories)
        self._recipes: List[Recipe] = list(recipes)
        self._categories_by_id: Dict[str, Category] = {}
        for category in self._categories:
            # First occurrence wins, matching a front-to-back scan
            self._categories_by_id.setdefault(category.id, category)

    @classmethod
    async def load(cls, data_dir: Union[str, Path]) -> "CatalogService":
        """
        Load categories.json and recipes.json from `data_dir`.

        Raises:
            FileNotFoundError: a data file is missing
            ValueError / pydantic.ValidationError: a data file is malformed
        """
        data_dir = Path(data_dir)
        raw_categories = await _read_json_list(data_dir / CATEGORIES_FILE)
        raw_recipes = await _read_json_list(data_dir / RECIPES_FILE)

        service = cls(
            categories=[Category.model_validate(item) for item in raw_categories],
            recipes=[Recipe.model_validate(item) for item in raw_recipes],
        )
        logger.info(
            "Catalog loaded from %s: %d categories, %d recipes",
            data_dir,
            service.category_count,
            service.recipe_count,
        )
        return service

    @property
    def category_count(self) -> int:
        return len(self._categories)

    @property
    def recipe_count(self) -> int:
        return len(self._recipes)

    # ── Categories ────────────────────────────────────────────────────────

    def list_categories(self) -> List[Category]:
        return list(self._categories)

    def get_category_by_id(self, category_id: str) -> Optional[Category]:
        return self._categories_by_id.get(category_id)

    def get_category_name(self, category_id: str) -> str:
        """Resolve a soft category reference; never fails."""
        category = self.get_category_by_id(category_id)
        return category.name if category else UNKNOWN_CATEGORY

    # ── Recipes ───────────────────────────────────────────────────────────

    def list_recipes(
        self,
        category_id: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[RecipeSummary]:
        """
        Recipe summaries, filtered conjunctively.

        category_id: exact match on the recipe's category_id
        keyword:     case-insensitive substring of name or description

        Empty strings count as "no filter".
        """
        recipes: Iterable[Recipe] = self._recipes

        if category_id:
            recipes = [r for r in recipes if r.category_id == category_id]

        if keyword:
            term = keyword.lower()
            recipes = [
                r for r in recipes
                if term in r.name.lower() or term in r.description.lower()
            ]

        return [self._summarize(r) for r in recipes]

    def get_recipe_by_id(self, recipe_id: int) -> Optional[Recipe]:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def _summarize(self, recipe: Recipe) -> RecipeSummary:
        return RecipeSummary(
            id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            category_id=recipe.category_id,
            category=self.get_category_name(recipe.category_id),
            cook_time=recipe.cook_time,
            calories=recipe.calories,
            image=recipe.image,
        )
