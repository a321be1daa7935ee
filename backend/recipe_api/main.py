"""
Recipe API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn recipe_api.main:app),
       and by the tests with their own settings.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Request ID  │→│   Logging    │→│    CORS     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /api/users   │ │ /api/recipes │ │ /api/       │  │
    │  │              │ │              │ │ categories  │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  app.state: user_store, account_service,            │
    │             catalog_service                         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration
    3. Open the user store and ensure its schema exists
    4. Load the catalog
    5. Build the account service

    Shutdown:
    1. Close the user store (dispose engine)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_api import __version__
from recipe_api.config import Settings, settings as default_settings
from recipe_api.exceptions import RecipeApiError
from recipe_api.middleware.logging import RequestLoggingMiddleware
from recipe_api.middleware.request_id import RequestIDMiddleware, request_id_var
from recipe_api.routes import categories, health, recipes, users
from recipe_api.services.account_service import AccountService
from recipe_api.services.catalog_service import CatalogService
from recipe_api.services.user_store import UserStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup, before any other initialization.
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Library loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def build_lifespan(settings: Settings):
    """Lifespan bound to one Settings object."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(settings.log_level)
        logger.info("=" * 60)
        logger.info("Recipe API starting up...")

        # Missing catalog files are fatal; there is nothing to serve without them
        try:
            settings.validate_catalog_files()
        except ValueError as e:
            logger.error("Configuration error: %s", str(e))
            raise

        store = UserStore.from_url(
            settings.database_url,
            retry_attempts=settings.db_retry_attempts,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )
        await store.initialize()

        catalog = await CatalogService.load(settings.catalog_path)

        app.state.user_store = store
        app.state.catalog_service = catalog
        app.state.account_service = AccountService(store, bcrypt_rounds=settings.bcrypt_rounds)

        logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
        logger.info("API docs: http://%s:%d/api-docs", settings.backend_host, settings.backend_port)
        logger.info("=" * 60)

        try:
            yield
        finally:
            # ── Shutdown ──────────────────────────────────────────────────
            logger.info("Recipe API shutting down...")
            await store.close()
            logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_body(
    request: Request,
    error: str,
    message: str,
    details: Optional[dict] = None,
) -> dict:
    body = {"error": error, "message": message, "request_id": _request_id(request)}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler map:
        RecipeApiError subclasses → their own status_code / error_code
                                    (400, 401, 404, 409; 500 for DatabaseError)
        RequestValidationError    → 400 validation_error (malformed body / params)
        HTTPException             → its own status (unknown routes → 404)
        Exception (fallback)      → 500 internal_server_error

    4xx responses return the exception context as `details`. 5xx responses
    carry a generic message; internal detail is logged, and only returned
    when EXPOSE_ERROR_DETAILS is on.
    """

    def _internal_details(exc: Exception, context: Optional[dict] = None) -> Optional[dict]:
        if not settings.expose_error_details:
            return None
        details = {"error_type": type(exc).__name__}
        if context:
            details.update(context)
        return details

    @app.exception_handler(RecipeApiError)
    async def handle_app_error(request: Request, exc: RecipeApiError):
        rid = _request_id(request)
        if exc.is_client_error:
            logger.warning("[%s] %s: %s", rid, exc.error_code, exc.message)
            content = _error_body(request, exc.error_code, exc.message, exc.context)
        else:
            logger.error(
                "[%s] %s: %s | Context: %s",
                rid,
                type(exc).__name__,
                exc.message,
                exc.context,
            )
            content = _error_body(
                request,
                exc.error_code,
                "An internal error occurred. Please try again later.",
                _internal_details(exc, exc.context),
            )
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.warning("[%s] Malformed request: %s", _request_id(request), errors)
        return JSONResponse(
            status_code=400,
            content=_error_body(request, "validation_error", "Invalid request", {"errors": errors}),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        error = "not_found" if exc.status_code == 404 else "http_error"
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, error, message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, stack trace to the server log only."""
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request,
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
                _internal_details(exc),
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to build the app with; defaults to the
                  environment-loaded module settings.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Recipe API",
        description=(
            "Static Turkish recipe and category catalog with filtering and search, "
            "plus user registration and login."
        ),
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=build_lifespan(settings),
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app, settings)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(users.router)
    app.include_router(recipes.router)
    app.include_router(categories.router)
    app.include_router(health.router)

    return app


# uvicorn entry point: `uvicorn recipe_api.main:app`
app = create_app()
