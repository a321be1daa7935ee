"""
Recipe API — Shared Schemas
=============================

What:  Pydantic base model for camelCase wire format, plus the error and
       health response models shared by every router.
How:   `ApiModel` uses an alias generator so Python code works with snake_case
       attributes while JSON on the wire is camelCase (createdAt, categoryId).
       FastAPI serializes response models by alias.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for all API models: camelCase aliases, populate by either name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "conflict")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "conflict",
            "message": "Email already exists",
            "details": {"field": "email"},
            "request_id": "1f0c9a2b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="User store connectivity: connected, disconnected")
    categories: int = Field(description="Number of categories loaded")
    recipes: int = Field(description="Number of recipes loaded")
    uptime_seconds: float = Field(description="Seconds since service started")
