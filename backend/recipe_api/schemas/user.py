"""
Recipe API — Account Request/Response Schemas
===============================================

What:  API contract for registration, login and profile retrieval.

Request models are intentionally permissive (missing strings default to "")
so the business rules, and their exact messages, live in AccountService.
Only structurally broken bodies (not JSON, wrong types) are rejected here.

UserProfile is the only user shape the API ever returns. It has no
password field, so a hash cannot be serialized by accident.
"""

from typing import Optional

from pydantic import Field

from recipe_api.schemas.common import ApiModel


class RegisterRequest(ApiModel):
    """Body of POST /api/users/register."""
    email: str = Field(default="", description="Account email (unique)")
    password: str = Field(default="", description="Plain password, at least 6 characters")
    name: str = Field(default="", description="Display name")
    birthday: Optional[str] = Field(default=None, description="Optional date, YYYY-MM-DD")


class LoginRequest(ApiModel):
    """Body of POST /api/users/login."""
    email: str = Field(default="", description="Account email")
    password: str = Field(default="", description="Plain password")


class UserProfile(ApiModel):
    """
    What:  Public-safe view of a stored user.
    Who:   Returned by register (201), login (200) and GET /api/users/{id}.
    """
    id: str = Field(description="User identifier (UUID)")
    email: str = Field(description="Account email")
    name: str = Field(description="Display name")
    birthday: Optional[str] = Field(default=None, description="Birthday, YYYY-MM-DD")
    created_at: str = Field(description="Creation time (ISO 8601, UTC)")
    updated_at: str = Field(description="Last update time (ISO 8601, UTC)")
