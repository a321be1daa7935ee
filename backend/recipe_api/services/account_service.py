"""
Recipe API — Account Service (Business Logic)
===============================================

What:  Registration, login and profile lookup for user accounts.
How:   Validates input, hashes/verifies passwords through recipe_api.security,
       and reads/writes through an injected UserStore.
Who:   Called by the users router; constructed once in the lifespan.

Register Flow (POST /api/users/register):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Body    │───▶│  Validate   │───▶│ bcrypt hash  │───▶│  INSERT  │
    │  (Route) │    │  (fail fast)│    │ (thread pool)│    │ (unique) │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    Validation order, first violation wins:
      1. email shape            → ValidationError("Invalid email format")
      2. password length >= 6   → ValidationError("Password must be at least 6 characters long")
      3. name not blank         → ValidationError("Name is required")
      4. birthday, if given     → ValidationError (format, then calendar date)
      5. email not registered   → ConflictError("Email already exists")

    Step 5 is decided by the store's unique index during the insert, so
    nothing is written unless steps 1-4 pass, and two racing registrations
    for one email produce exactly one account.

Login never says which half of the credentials was wrong: an unknown email
and a wrong password raise the same UnauthorizedError.
"""

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Optional

from recipe_api.exceptions import ConflictError, UnauthorizedError, ValidationError
from recipe_api.models.user import User
from recipe_api.schemas.user import UserProfile
from recipe_api.security import DEFAULT_BCRYPT_ROUNDS, hash_password, verify_password
from recipe_api.services.user_store import UserStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
BIRTHDAY_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
USER_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def utc_timestamp() -> str:
    """Current instant as ISO 8601 UTC with milliseconds, e.g. 2024-01-15T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_profile(user: User) -> UserProfile:
    """Map a stored row to its public view. The password hash is not copied."""
    return UserProfile(
        id=user.id,
        email=user.email,
        name=user.name,
        birthday=user.birthday,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class AccountService:
    """
    Business logic for user accounts.

    Responsibilities:
        - register(): validate → hash → insert → profile
        - login(): lookup → verify → profile
        - get_profile(): id format check → lookup → profile or None
    """

    def __init__(self, store: UserStore, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    # ── Validation ────────────────────────────────────────────────────────

    @staticmethod
    def validate_registration(
        email: str,
        password: str,
        name: str,
        birthday: Optional[str],
    ) -> None:
        """
        Apply the registration rules in order, raising on the first failure.

        Raises:
            ValidationError: with the message of the first violated rule
        """
        if not EMAIL_PATTERN.fullmatch(email or ""):
            raise ValidationError(message="Invalid email format", field="email")

        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                field="password",
            )

        if not name or not name.strip():
            raise ValidationError(message="Name is required", field="name")

        if birthday:
            if not BIRTHDAY_PATTERN.fullmatch(birthday):
                raise ValidationError(
                    message="Birthday must be in YYYY-MM-DD format",
                    field="birthday",
                )
            try:
                datetime.strptime(birthday, "%Y-%m-%d")
            except ValueError:
                raise ValidationError(message="Invalid birthday date", field="birthday")

    # ── Operations ────────────────────────────────────────────────────────

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        birthday: Optional[str] = None,
    ) -> UserProfile:
        """
        Create a new account and return its profile.

        Raises:
            ValidationError: input failed a rule (→ 400)
            ConflictError: email already registered (→ 409)
            DatabaseError: store failure (→ 500)
        """
        self.validate_registration(email, password, name, birthday)

        password_hash = await hash_password(password, self.bcrypt_rounds)
        now = utc_timestamp()

        record = User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            name=name,
            birthday=birthday or None,
            created_at=now,
            updated_at=now,
        )

        try:
            await self.store.insert(record)
        except ConflictError:
            logger.info("Registration rejected, email already registered: %s", email)
            raise

        logger.info("Registered user %s", record.id)
        return to_profile(record)

    async def login(self, email: str, password: str) -> UserProfile:
        """
        Check credentials and return the matching profile.

        Raises:
            ValidationError: email or password missing (→ 400)
            UnauthorizedError: unknown email or wrong password (→ 401)
        """
        if not email or not password:
            raise ValidationError(message="Email and password are required")

        user = await self.store.find_by_email(email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise UnauthorizedError(message=INVALID_CREDENTIALS_MESSAGE)

        if not await verify_password(password, user.password_hash):
            logger.info("Login failed: wrong password for user %s", user.id)
            raise UnauthorizedError(message=INVALID_CREDENTIALS_MESSAGE)

        logger.info("User %s logged in", user.id)
        return to_profile(user)

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Look up a profile by id.

        Returns None for a well-formed id with no account; the route turns
        that into 404. A malformed id is an error raised before any lookup.

        Raises:
            ValidationError: id is not UUID-shaped (→ 400)
        """
        if not USER_ID_PATTERN.fullmatch(user_id or ""):
            raise ValidationError(message="Invalid user ID format", field="user_id")

        user = await self.store.find_by_id(user_id)
        if user is None:
            return None
        return to_profile(user)
