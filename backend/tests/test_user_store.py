"""
Recipe API — User Store Tests
===============================

What:  Tests for UserStore against a real temporary SQLite file.
How:   Each test gets its own database via the user_store fixture.

What we test:
    ✅ initialize() is idempotent and keeps existing rows
    ✅ Lookups by email (exact, case-sensitive) and by id
    ✅ Duplicate email → ConflictError, and nothing else is written
    ✅ Lock contention is retried, then surfaces as DatabaseError
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from recipe_api.exceptions import ConflictError, DatabaseError
from recipe_api.models.user import User
from recipe_api.services.user_store import UserStore, _is_lock_contention

TIMESTAMP = "2024-01-15T12:00:00.000Z"


def make_user(user_id: str, email: str, name: str = "Test User") -> User:
    return User(
        id=user_id,
        email=email,
        password_hash="$2b$04$notarealhashbutlongenoughtostore",
        name=name,
        birthday=None,
        created_at=TIMESTAMP,
        updated_at=TIMESTAMP,
    )


def locked_error() -> OperationalError:
    return OperationalError("INSERT INTO users ...", {}, Exception("database is locked"))


class TestInitialize:

    @pytest.mark.asyncio
    async def test_initialize_twice_keeps_rows(self, user_store):
        await user_store.insert(make_user("id-1", "a@example.com"))

        await user_store.initialize()

        found = await user_store.find_by_email("a@example.com")
        assert found is not None
        assert found.id == "id-1"

    @pytest.mark.asyncio
    async def test_ping(self, user_store):
        assert await user_store.ping() is True


class TestLookups:

    @pytest.mark.asyncio
    async def test_find_by_email_and_id(self, user_store):
        await user_store.insert(make_user("id-1", "a@example.com", name="Ayse"))

        by_email = await user_store.find_by_email("a@example.com")
        by_id = await user_store.find_by_id("id-1")

        assert by_email.name == "Ayse"
        assert by_id.email == "a@example.com"
        assert by_id.password_hash.startswith("$2b$")
        assert by_id.created_at == TIMESTAMP

    @pytest.mark.asyncio
    async def test_missing_user_is_none(self, user_store):
        assert await user_store.find_by_email("ghost@example.com") is None
        assert await user_store.find_by_id("no-such-id") is None

    @pytest.mark.asyncio
    async def test_email_match_is_case_sensitive(self, user_store):
        await user_store.insert(make_user("id-1", "a@example.com"))
        assert await user_store.find_by_email("A@example.com") is None


class TestInsert:

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_conflict(self, user_store):
        await user_store.insert(make_user("id-1", "a@example.com"))

        with pytest.raises(ConflictError) as exc_info:
            await user_store.insert(make_user("id-2", "a@example.com"))

        assert exc_info.value.message == "Email already exists"
        assert exc_info.value.context == {"field": "email"}
        assert await user_store.find_by_id("id-2") is None

    @pytest.mark.asyncio
    async def test_differently_cased_email_is_a_new_account(self, user_store):
        await user_store.insert(make_user("id-1", "a@example.com"))
        await user_store.insert(make_user("id-2", "A@example.com"))
        assert (await user_store.find_by_id("id-2")).email == "A@example.com"

    @pytest.mark.asyncio
    async def test_lock_contention_is_retried(self, user_store):
        once = AsyncMock(side_effect=[locked_error(), None])
        with patch.object(user_store, "_insert_once", once):
            record = make_user("id-1", "a@example.com")
            assert await user_store.insert(record) is record
        assert once.await_count == 2

    @pytest.mark.asyncio
    async def test_lock_contention_exhausted_raises_database_error(self, database_url):
        store = UserStore.from_url(database_url, retry_attempts=2)
        try:
            once = AsyncMock(side_effect=locked_error())
            with patch.object(store, "_insert_once", once):
                with pytest.raises(DatabaseError):
                    await store.insert(make_user("id-1", "a@example.com"))
            assert once.await_count == 2
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_conflict_is_not_retried(self, user_store):
        once = AsyncMock(side_effect=ConflictError(message="Email already exists", field="email"))
        with patch.object(user_store, "_insert_once", once):
            with pytest.raises(ConflictError):
                await user_store.insert(make_user("id-1", "a@example.com"))
        assert once.await_count == 1


class TestLockContentionPredicate:

    def test_locked_operational_error(self):
        assert _is_lock_contention(locked_error())

    def test_other_operational_error(self):
        error = OperationalError("SELECT 1", {}, Exception("no such table: users"))
        assert not _is_lock_contention(error)

    def test_unrelated_exception(self):
        assert not _is_lock_contention(ValueError("database is locked"))


class TestSharedConnection:

    @pytest.mark.asyncio
    async def test_in_memory_store_serializes(self):
        store = UserStore.from_url("sqlite+aiosqlite://")
        try:
            assert store._shared_connection is True
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_file_store_does_not_serialize(self, user_store):
        assert user_store._shared_connection is False
