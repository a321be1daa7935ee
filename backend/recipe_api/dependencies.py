"""
Recipe API — Route Dependencies
=================================

What:  FastAPI dependencies that hand the lifespan-built services to routes.
How:   The lifespan stores each service on `app.state`; these functions read
       them back from the current request. Tests swap a service by assigning
       a different object to `app.state` or via `app.dependency_overrides`.
"""

from fastapi import Request

from recipe_api.services.account_service import AccountService
from recipe_api.services.catalog_service import CatalogService
from recipe_api.services.user_store import UserStore


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service
