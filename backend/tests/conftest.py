"""
Recipe API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.
Who:   Used by all test files in the tests/ directory.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── test_settings: Settings pointing at a temporary SQLite file
    ├── user_store: Initialized UserStore on that file, closed afterwards
    ├── account_service: AccountService over user_store (fast bcrypt)
    ├── catalog: Small in-memory CatalogService with a dangling category ref
    ├── app: FastAPI app with its lifespan entered
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Keep the module-level settings away from any real .env values
os.environ.setdefault("LOG_LEVEL", "WARNING")

from recipe_api.config import Settings
from recipe_api.main import create_app
from recipe_api.schemas.catalog import Category, Recipe
from recipe_api.services.account_service import AccountService
from recipe_api.services.catalog_service import CatalogService
from recipe_api.services.user_store import UserStore

# bcrypt's minimum cost; hashing at the production cost would dominate test time
TEST_BCRYPT_ROUNDS = 4


def make_recipe(recipe_id: int, name: str, category_id: str, description: str = "") -> Recipe:
    """Build a minimal valid Recipe for in-memory catalogs."""
    return Recipe(
        id=recipe_id,
        name=name,
        description=description or f"{name} description",
        category_id=category_id,
        cook_time=30,
        calories=250,
        image=f"/images/{recipe_id}.jpg",
        ingredients=[{"name": "water", "amount": 1, "unit": "cup"}],
        instructions=["Cook it."],
        nutrition={"calories": 250, "protein": 10, "carbohydrates": 30, "fat": 8},
    )


@pytest.fixture
def database_url(tmp_path) -> str:
    """A fresh SQLite file per test; pytest removes tmp_path afterwards."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}"


@pytest.fixture
def test_settings(database_url) -> Settings:
    return Settings(
        database_url=database_url,
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        catalog_data_dir="",
        log_level="WARNING",
        expose_error_details=False,
    )


@pytest_asyncio.fixture
async def user_store(database_url) -> AsyncGenerator[UserStore, None]:
    store = UserStore.from_url(database_url, retry_attempts=3)
    await store.initialize()
    try:
        yield store
    finally:
        await store.close()


@pytest.fixture
def account_service(user_store) -> AccountService:
    return AccountService(user_store, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def catalog() -> CatalogService:
    """
    Three categories, four recipes. Recipe 4 points at a category that
    does not exist.
    """
    categories = [
        Category(id="soups", name="Soups", description="Warm bowls"),
        Category(id="desserts", name="Desserts", description="Sweet things"),
        Category(id="pastries", name="Pastries"),
    ]
    recipes = [
        make_recipe(1, "Lentil Soup", "soups", "Red lentils with mint"),
        make_recipe(2, "Tomato Soup", "soups", "Roasted tomatoes and RICE"),
        make_recipe(3, "Rice Pudding", "desserts", "Milk, rice and cinnamon"),
        make_recipe(4, "Mystery Stew", "stews", "Nobody knows"),
    ]
    return CatalogService(categories=categories, recipes=recipes)


@pytest_asyncio.fixture
async def app(test_settings):
    """
    FastAPI app with startup/shutdown run around the test.

    ASGITransport does not send lifespan events, so the lifespan context is
    entered here directly.
    """
    application = create_app(test_settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
