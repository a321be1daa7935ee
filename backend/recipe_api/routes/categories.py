"""
Recipe API — Category Routes
==============================

What:  GET /api/categories (all) and GET /api/categories/{id} (single).
"""

from typing import List

from fastapi import APIRouter, Depends, Response

from recipe_api.dependencies import get_catalog_service
from recipe_api.exceptions import NotFoundError
from recipe_api.routes.recipes import CATALOG_CACHE_CONTROL
from recipe_api.schemas.catalog import Category
from recipe_api.schemas.common import ErrorResponse
from recipe_api.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=List[Category], summary="List categories")
async def list_categories(
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[Category]:
    response.headers["Cache-Control"] = CATALOG_CACHE_CONTROL
    return catalog.list_categories()


@router.get(
    "/{category_id}",
    response_model=Category,
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Get a category by ID",
)
async def get_category(
    category_id: str,
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
) -> Category:
    category = catalog.get_category_by_id(category_id)
    if category is None:
        raise NotFoundError(resource="category")
    response.headers["Cache-Control"] = CATALOG_CACHE_CONTROL
    return category
