"""
Recipe API — User Store (Persistence)
=======================================

What:  The durable `users` table behind registration and login.
How:   Wraps an AsyncEngine and a session factory. Each operation opens its
       own short-lived AsyncSession, so one store instance is safely shared
       by all concurrent requests.
Who:   Constructed once by the application lifespan and stored on
       `app.state`; AccountService receives it as a constructor argument.
       Tests build one per test against a temporary SQLite file.
When:  initialize() at startup, close() at shutdown.

Uniqueness:
    insert() is a single constrained INSERT. The unique index on
    users.email decides which of two racing registrations wins; the loser
    gets ConflictError. There is no separate existence check to race
    against.

Lock contention:
    SQLite allows one writer at a time. A writer that outlives the busy
    timeout fails with "database is locked"; tenacity retries those inserts
    with exponential backoff and jitter before giving up with DatabaseError.

In-memory SQLite (`sqlite+aiosqlite://`) runs on a single shared connection
(StaticPool). There the store runs its operations one at a time, so a
duplicate-email rollback cannot undo another caller's pending insert.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import insert, select, text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import StaticPool
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from recipe_api.database import (
    Base,
    create_engine_from_url,
    create_session_factory,
    dispose_engine,
)
from recipe_api.exceptions import ConflictError, DatabaseError
from recipe_api.models.user import User

logger = logging.getLogger(__name__)


def _is_lock_contention(exc: BaseException) -> bool:
    """True for SQLite 'database is locked' / 'database table is locked' errors."""
    return isinstance(exc, OperationalError) and "locked" in str(exc.orig).lower()


class UserStore:
    """
    Async persistence for user records.

    Operations:
        initialize()      Create table + unique email index if missing
        find_by_email()   Point lookup on the unique email index
        find_by_id()      Point lookup on the primary key
        insert()          Constrained insert; ConflictError on duplicate email
        ping()            SELECT 1, for the health check
        close()           Dispose the engine
    """

    def __init__(self, engine: AsyncEngine, retry_attempts: int = 3):
        self.engine = engine
        self._session_factory = create_session_factory(engine)
        self._retry_attempts = retry_attempts
        # In-memory SQLite: every session shares one connection, so a rollback
        # in one would discard work in flight in another
        self._shared_connection = isinstance(engine.pool, StaticPool)
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def _exclusive(self) -> AsyncIterator[None]:
        """Run one store operation at a time when the connection is shared."""
        if not self._shared_connection:
            yield
            return
        async with self._lock:
            yield

    @classmethod
    def from_url(
        cls,
        database_url: str,
        retry_attempts: int = 3,
        **engine_options,
    ) -> "UserStore":
        """Build a store with its own engine for `database_url`."""
        engine = create_engine_from_url(database_url, **engine_options)
        return cls(engine, retry_attempts=retry_attempts)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """
        Ensure the users table and its email index exist.

        create_all checks for each table/index first, so repeated calls are
        no-ops and existing rows are never touched.
        """
        try:
            async with self._exclusive(), self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error("Failed to initialize user store: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not initialize the user database.",
                context={"error_type": type(e).__name__},
            )
        logger.info("User store initialized")

    async def close(self) -> None:
        """Release all pooled connections."""
        await dispose_engine(self.engine)
        logger.info("User store closed")

    async def ping(self) -> bool:
        """Lightweight connectivity probe."""
        try:
            async with self._exclusive(), self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("User store unreachable: %s", str(e))
            return False

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_by_email(self, email: str) -> Optional[User]:
        """Return the user with exactly this email, or None."""
        return await self._find_one(User.email == email, lookup="email")

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Return the user with this id, or None."""
        return await self._find_one(User.id == user_id, lookup="id")

    async def _find_one(self, condition, lookup: str) -> Optional[User]:
        try:
            async with self._exclusive(), self._session_factory() as session:
                result = await session.execute(select(User).where(condition))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user by %s: %s", lookup, str(e))
            raise DatabaseError(
                message="Could not retrieve the user. Please try again.",
                context={"lookup": lookup, "error_type": type(e).__name__},
            )

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert(self, record: User) -> User:
        """
        Persist a new user in one committed INSERT.

        Raises:
            ConflictError: the email is already registered (→ 409)
            DatabaseError: any other failure, including lock contention that
                           outlived the retries (→ 500)
        """
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception(_is_lock_contention),
                stop=stop_after_attempt(self._retry_attempts),
                wait=wait_exponential_jitter(initial=0.05, max=1, jitter=0.05),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    await self._insert_once(record)
        except (ConflictError, DatabaseError):
            raise
        except SQLAlchemyError as e:
            logger.error("Database error inserting user %s: %s", record.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the account. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User %s persisted", record.id)
        return record

    async def _insert_once(self, record: User) -> None:
        statement = insert(User.__table__).values(
            id=record.id,
            email=record.email,
            password=record.password_hash,
            name=record.name,
            birthday=record.birthday,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
        async with self._exclusive(), self._session_factory() as session:
            try:
                await session.execute(statement)
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                detail = str(e.orig).lower()
                if "email" in detail:
                    raise ConflictError(
                        message="Email already exists",
                        field="email",
                    ) from e
                logger.error("Integrity error inserting user %s: %s", record.id, detail)
                raise DatabaseError(
                    message="Could not create the account. Please try again.",
                    context={"error_type": "IntegrityError"},
                ) from e
