"""
Recipe API — User SQLAlchemy Model
====================================

What:  ORM model representing the `users` table.
How:   Inherits from the shared DeclarativeBase; UserStore.initialize() and
       Alembic both create the table from this metadata.
Who:   Owned by UserStore. Never serialized directly; AccountService maps it
       to a UserProfile, which has no password field.

Table Design:
    - id: UUID4 string generated in Python at registration, immutable
    - email: unique natural key, stored exactly as submitted (case-sensitive)
    - password: bcrypt hash, never leaves the store/service boundary
    - birthday: optional YYYY-MM-DD string
    - created_at / updated_at: ISO-8601 UTC strings with a "Z" suffix;
      equal for every row since accounts are never updated

    The unique index on email is what enforces the one-account-per-email
    rule. Two concurrent inserts for the same email cannot both commit.
"""

from typing import Optional

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from recipe_api.database import Base


class User(Base):
    """A registered account."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    email: Mapped[str] = mapped_column(Text, nullable=False)

    # Column keeps its historical name; the attribute says what it holds
    password_hash: Mapped[str] = mapped_column("password", Text, nullable=False)

    name: Mapped[str] = mapped_column(Text, nullable=False)

    birthday: Mapped[Optional[str]] = mapped_column(String(10), nullable=True, default=None)

    created_at: Mapped[str] = mapped_column(String(32), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)

    __table_args__ = (
        Index("idx_users_email", "email", unique=True),
    )

    def __repr__(self) -> str:
        """Developer-friendly representation; the hash is deliberately left out."""
        return f"<User(id={self.id}, email='{self.email}')>"
