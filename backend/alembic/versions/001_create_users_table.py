"""Create users table

Revision ID: 001
Revises: None
Create Date: 2025-01-10 00:00:00.000000+00:00

What:  Creates the `users` table backing registration and login.
How:   Text id primary key (UUID string), unique index on email.

Rollback: downgrade() drops the table entirely (destructive, all accounts lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users table and its unique email index."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        # bcrypt hash, never the plain password
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("birthday", sa.String(10), nullable=True),
        # ISO 8601 UTC strings, e.g. 2025-01-10T09:30:00.000Z
        sa.Column("created_at", sa.String(32), nullable=False),
        sa.Column("updated_at", sa.String(32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    # One account per email, enforced by the database
    op.create_index("idx_users_email", "users", ["email"], unique=True)


def downgrade() -> None:
    """
    Drop the users table entirely.

    WARNING: destructive, every account is lost.
    """
    op.drop_index("idx_users_email", table_name="users")
    op.drop_table("users")
