"""
Recipe API — Recipe Routes
============================

What:  GET /api/recipes (filtered list) and GET /api/recipes/{id} (detail).
How:   Delegates to CatalogService. Recipe data is static for the process
       lifetime, so responses carry a public Cache-Control header.
"""

import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from recipe_api.dependencies import get_catalog_service
from recipe_api.exceptions import NotFoundError, ValidationError
from recipe_api.schemas.catalog import Recipe, RecipeSummary
from recipe_api.schemas.common import ErrorResponse
from recipe_api.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/recipes", tags=["Recipes"])

CATALOG_CACHE_CONTROL = "public, max-age=300"

# ASCII digits only: no sign, padding, underscores or other scripts' digits
RECIPE_ID_PATTERN = re.compile(r"[0-9]+")


@router.get(
    "",
    response_model=List[RecipeSummary],
    summary="List recipes",
    description=(
        "Returns recipe summaries. `categoryId` keeps exact category matches; "
        "`keyword` keeps recipes whose name or description contains the term "
        "(case-insensitive). Both filters combine."
    ),
)
async def list_recipes(
    response: Response,
    category_id: Optional[str] = Query(default=None, alias="categoryId"),
    keyword: Optional[str] = Query(default=None),
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[RecipeSummary]:
    result = catalog.list_recipes(category_id=category_id, keyword=keyword)
    response.headers["X-Total-Count"] = str(len(result))
    response.headers["Cache-Control"] = CATALOG_CACHE_CONTROL
    return result


@router.get(
    "/{recipe_id}",
    response_model=Recipe,
    responses={
        200: {"description": "Full recipe", "model": Recipe},
        400: {"description": "Non-numeric recipe ID", "model": ErrorResponse},
        404: {"description": "Recipe not found", "model": ErrorResponse},
    },
    summary="Get a recipe by ID",
)
async def get_recipe(
    recipe_id: str,
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
) -> Recipe:
    """
    The id is taken as a string and checked here so a non-numeric value is
    a 400 with the API's error envelope, not FastAPI's 422.
    """
    if not RECIPE_ID_PATTERN.fullmatch(recipe_id):
        raise ValidationError(message="Invalid recipe ID", field="recipe_id")

    recipe = catalog.get_recipe_by_id(int(recipe_id))
    if recipe is None:
        raise NotFoundError(resource="recipe")

    response.headers["Cache-Control"] = CATALOG_CACHE_CONTROL
    return recipe
