"""
Recipe API — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Imported by the app factory, the Alembic environment and the tests.
When:  Loaded once at module import time; validated before the app starts.

Settings are only read at the edges (app factory, lifespan, migrations).
Services receive their collaborators and tunables as constructor arguments,
so tests build isolated instances without touching this module.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Catalog JSON files bundled with the package
BUNDLED_DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development.
    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Async SQLAlchemy connection string
    # Format: sqlite+aiosqlite:///<path> or any other async driver URL
    database_url: str = Field(
        default="sqlite+aiosqlite:///./database.sqlite",
        description="Async SQLAlchemy database URL for the user store",
    )

    # Pool sizing only applies to server databases; SQLite uses its own pool
    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # What: Attempts for a write that hits SQLite lock contention
    db_retry_attempts: int = Field(default=3, ge=1, le=10)

    # ── Security ──────────────────────────────────────────────────────────
    # What: bcrypt cost factor (2^rounds iterations)
    # Valid range: 4 (bcrypt minimum, tests) to 15
    bcrypt_rounds: int = Field(default=10, ge=4, le=15)

    # ── Catalog ───────────────────────────────────────────────────────────
    # What: Directory holding categories.json and recipes.json
    # Empty means the copy bundled inside the package
    catalog_data_dir: str = Field(default="")

    @property
    def catalog_path(self) -> Path:
        """Resolved catalog directory."""
        if self.catalog_data_dir:
            return Path(self.catalog_data_dir)
        return BUNDLED_DATA_DIR

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # What: Include exception type and context in 500 responses
    # Only for non-production diagnostics; off by default
    expose_error_details: bool = Field(default=False)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
        "extra": "ignore",
    }

    def validate_catalog_files(self) -> None:
        """
        What:  Validates that the configured paths are usable.
        When:  Called during app startup (lifespan).
        How:   Checks each requirement and raises ValueError listing all problems.
        """
        errors = []
        for filename in ("categories.json", "recipes.json"):
            if not (self.catalog_path / filename).is_file():
                errors.append(f"Catalog file '{filename}' not found in {self.catalog_path}")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
