# Services package init
"""
Recipe API — Services Layer
=============================

What:  Business logic between routes (HTTP) and storage.
How:   Services are plain classes constructed once in the application
       lifespan with their collaborators passed in, then handed to routes
       through FastAPI dependencies (recipe_api.dependencies).

Service Inventory:
    - UserStore: durable users table (async SQLAlchemy)
    - AccountService: register / login / profile over a UserStore
    - CatalogService: static categories and recipes loaded from JSON
"""

from recipe_api.services.account_service import AccountService
from recipe_api.services.catalog_service import CatalogService
from recipe_api.services.user_store import UserStore

__all__ = ["AccountService", "CatalogService", "UserStore"]
