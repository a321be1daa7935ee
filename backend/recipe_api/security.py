"""
Recipe API — Password Hashing
===============================

What:  bcrypt hashing and verification for account passwords.
How:   bcrypt.hashpw / bcrypt.checkpw run in the default thread pool via
       asyncio.to_thread, so a hash (tens of milliseconds at cost 10) never
       stalls the event loop serving other requests.
Who:   Called by AccountService during register and login.

bcrypt only reads the first 72 bytes of its input, and recent releases
of the `bcrypt` package raise instead of silently truncating. Passwords
are therefore truncated to 72 UTF-8 bytes before both hashing and
verification, which keeps the two paths consistent.
"""

import asyncio

import bcrypt

BCRYPT_MAX_PASSWORD_BYTES = 72
DEFAULT_BCRYPT_ROUNDS = 10


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password_sync(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash a password with a fresh bcrypt salt.

    Returns the modular-crypt string ("$2b$10$..."), which embeds the
    cost and salt needed for verification.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password_sync(password: str, password_hash: str) -> bool:
    """
    Check a plain password against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch rather than an error.
    """
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        return False


async def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Async wrapper: hashes in a worker thread."""
    return await asyncio.to_thread(hash_password_sync, password, rounds)


async def verify_password(password: str, password_hash: str) -> bool:
    """Async wrapper: verifies in a worker thread."""
    return await asyncio.to_thread(verify_password_sync, password, password_hash)
