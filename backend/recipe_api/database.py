"""
Recipe API — Database Engine Management
=========================================

What:  Async SQLAlchemy engine construction, session factory and the ORM base.
How:   `create_engine_from_url()` builds an async engine, applying pool
       settings only where the driver supports them. `create_session_factory()`
       wraps it in an async_sessionmaker.
Who:   Used by UserStore (runtime) and the Alembic environment (migrations).
When:  Engine is created once at application startup by the lifespan handler
       and disposed at shutdown. Nothing is created at import time.

SQLite notes:
    - SQLite serializes writers with a file lock; concurrent inserts wait on
      the busy timeout instead of failing immediately.
    - In-memory URLs (`sqlite+aiosqlite://`) use a StaticPool so every session
      sees the same database.
"""

from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

# Seconds a SQLite connection waits for a competing writer to release the lock
SQLITE_BUSY_TIMEOUT = 15


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they register with one metadata
    object, which both UserStore.initialize() and Alembic use.
    """
    pass


def is_sqlite_url(database_url: str) -> bool:
    """True when the URL targets SQLite (file or memory)."""
    return make_url(database_url).get_backend_name() == "sqlite"


def create_engine_from_url(
    database_url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """
    Build an async engine for the given URL.

    Pool options are passed only to server databases. SQLite gets a busy
    timeout, and in-memory SQLite a StaticPool shared by all sessions.
    """
    if is_sqlite_url(database_url):
        url = make_url(database_url)
        kwargs = {"connect_args": {"timeout": SQLITE_BUSY_TIMEOUT}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_async_engine(database_url, echo=echo, **kwargs)

    return create_async_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps attributes readable after commit, which the
    store relies on when it returns freshly inserted rows.
    """
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def dispose_engine(engine: Optional[AsyncEngine]) -> None:
    """Gracefully closes all pooled connections of `engine`."""
    if engine is not None:
        await engine.dispose()
