"""
Recipe API — User Account Routes
==================================

What:  POST /api/users/register, POST /api/users/login, GET /api/users/{id}.
How:   Thin handlers: parse the body, call AccountService, return the
       profile. Service exceptions are translated by the global handlers
       in main.py.
"""

from fastapi import APIRouter, Depends

from recipe_api.dependencies import get_account_service
from recipe_api.exceptions import NotFoundError
from recipe_api.schemas.common import ErrorResponse
from recipe_api.schemas.user import LoginRequest, RegisterRequest, UserProfile
from recipe_api.services.account_service import AccountService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post(
    "/register",
    status_code=201,
    response_model=UserProfile,
    responses={
        201: {"description": "Account created", "model": UserProfile},
        400: {"description": "Invalid input", "model": ErrorResponse},
        409: {"description": "Email already exists", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    body: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
) -> UserProfile:
    return await accounts.register(
        email=body.email,
        password=body.password,
        name=body.name,
        birthday=body.birthday,
    )


@router.post(
    "/login",
    response_model=UserProfile,
    responses={
        200: {"description": "Credentials accepted", "model": UserProfile},
        400: {"description": "Email or password missing", "model": ErrorResponse},
        401: {"description": "Invalid email or password", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
async def login(
    body: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> UserProfile:
    return await accounts.login(email=body.email, password=body.password)


@router.get(
    "/{user_id}",
    response_model=UserProfile,
    responses={
        200: {"description": "User profile", "model": UserProfile},
        400: {"description": "Malformed user ID", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Get a user profile by ID",
)
async def get_profile(
    user_id: str,
    accounts: AccountService = Depends(get_account_service),
) -> UserProfile:
    """
    Absent users come back from the service as None, which is a 404 here;
    a malformed id is a 400 raised by the service before any lookup.
    """
    profile = await accounts.get_profile(user_id)
    if profile is None:
        raise NotFoundError(resource="user")
    return profile
