"""
Recipe API — Application Package Initializer
==============================================

What: Marks the `recipe_api` directory as a Python package.
Who:  Used by uvicorn (recipe_api.main:app), Alembic and pytest.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, hashing, lookups
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     User Store / Catalog data       │  ← Async SQLAlchemy, bundled JSON
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
