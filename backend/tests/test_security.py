"""
Recipe API — Password Hashing Tests
=====================================

What we test:
    ✅ Hashes are bcrypt strings carrying the requested cost
    ✅ Salting: the same password hashes differently each time
    ✅ Verification accepts the right password and rejects others
    ✅ Malformed stored hashes count as a mismatch
    ✅ Passwords longer than 72 bytes are accepted
"""

import pytest

from recipe_api.security import (
    BCRYPT_MAX_PASSWORD_BYTES,
    hash_password,
    hash_password_sync,
    verify_password,
    verify_password_sync,
)


class TestHashPassword:

    def test_hash_is_bcrypt_with_requested_cost(self):
        hashed = hash_password_sync("secret123", rounds=4)
        assert hashed.startswith("$2b$04$")
        assert "secret123" not in hashed

    def test_same_password_gets_distinct_salts(self):
        assert hash_password_sync("secret123", rounds=4) != hash_password_sync("secret123", rounds=4)

    @pytest.mark.asyncio
    async def test_async_wrapper_matches_sync_verification(self):
        hashed = await hash_password("secret123", rounds=4)
        assert verify_password_sync("secret123", hashed)


class TestVerifyPassword:

    def setup_method(self):
        self.hashed = hash_password_sync("secret123", rounds=4)

    def test_correct_password(self):
        assert verify_password_sync("secret123", self.hashed) is True

    def test_wrong_password(self):
        assert verify_password_sync("secret124", self.hashed) is False

    def test_case_matters(self):
        assert verify_password_sync("SECRET123", self.hashed) is False

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password_sync("secret123", "not-a-bcrypt-hash") is False

    @pytest.mark.asyncio
    async def test_async_verify(self):
        assert await verify_password("secret123", self.hashed) is True
        assert await verify_password("nope-nope", self.hashed) is False


class TestLongPasswords:

    def test_long_password_round_trips(self):
        password = "p" * 100
        hashed = hash_password_sync(password, rounds=4)
        assert verify_password_sync(password, hashed)

    def test_only_first_72_bytes_are_significant(self):
        prefix = "a" * BCRYPT_MAX_PASSWORD_BYTES
        hashed = hash_password_sync(prefix + "tail-one", rounds=4)
        assert verify_password_sync(prefix + "tail-two", hashed)

    def test_multibyte_password(self):
        password = "şifreğüçö" * 10
        hashed = hash_password_sync(password, rounds=4)
        assert verify_password_sync(password, hashed)
