"""
Recipe API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each class declares the HTTP status and machine-readable error code it
       maps to, and each instance carries a user-facing message plus an
       optional context dict. The global handlers in main.py turn them into
       the JSON error envelope.
Who:   Raised by services and the user store; caught by global handlers.

Exception Hierarchy:
    RecipeApiError (base)   500 server_error
    ├── ValidationError     400 validation_error   (client can fix)
    ├── UnauthorizedError   401 unauthorized       (bad credentials)
    ├── NotFoundError       404 not_found
    ├── ConflictError       409 conflict           (uniqueness violation)
    └── DatabaseError       500 server_error

Services report "not found" by returning None; routes turn that into
NotFoundError at the HTTP boundary.
"""

from typing import Any, Dict, Optional


class RecipeApiError(Exception):
    """
    Base exception for all Recipe API application errors.

    Attributes:
        message:  User-facing error description
        context:  Extra detail. Returned as `details` for 4xx responses,
                  only logged for 5xx.
        field:    Request field the error is about, if any (also in context)
    """

    status_code: int = 500
    error_code: str = "server_error"
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.field = field
        self.context = dict(context or {})
        if field:
            self.context["field"] = field
        super().__init__(self.message)

    @property
    def is_client_error(self) -> bool:
        return self.status_code < 500


class ValidationError(RecipeApiError):
    """
    Client input broke a rule: malformed email, short password, missing
    name, bad birthday, malformed user or recipe ID.

    Example response:
        {
            "error": "validation_error",
            "message": "Password must be at least 6 characters long",
            "details": {"field": "password"},
            "request_id": "1f0c9a2b"
        }
    """

    status_code = 400
    error_code = "validation_error"
    default_message = "Validation failed"


class UnauthorizedError(RecipeApiError):
    """
    Login credentials do not match.

    The message is identical for an unknown email and a wrong password,
    so the response does not reveal whether an account exists.
    """

    status_code = 401
    error_code = "unauthorized"
    default_message = "Invalid email or password"


class NotFoundError(RecipeApiError):
    """Unknown recipe, category or user identifier."""

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found"
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConflictError(RecipeApiError):
    """An insert hit a uniqueness constraint (registering a taken email)."""

    status_code = 409
    error_code = "conflict"
    default_message = "Resource already exists"


class DatabaseError(RecipeApiError):
    """
    Database operation failed: connection lost, lock contention that
    outlived the retries, schema creation failure.

    The client always gets a generic message. Driver errors and statement
    details stay in the server log.
    """

    default_message = "A database error occurred. Please try again later."
