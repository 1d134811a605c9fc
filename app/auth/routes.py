# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for account creation, sign-in and the current identity.
# Mounted under /api/auth.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from app.auth.dependencies import get_current_user
from app.auth.models import AuthResponse, AuthUser, SigninRequest, SignupRequest, UserResponse
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest) -> AuthResponse:
    """
    Create an account.

    Returns:
        AuthResponse: The new user and, unless email confirmation is
        required, an access token

    Raises:
        400: If the account can't be created (e.g. email already registered)
    """
    return await run_in_threadpool(
        AuthService.signup, request.email, request.password, request.name
    )


@router.post("/signin", response_model=AuthResponse)
async def signin(request: SigninRequest) -> AuthResponse:
    """
    Sign in with email and password.

    Raises:
        401: If the credentials are invalid
    """
    return await run_in_threadpool(AuthService.signin, request.email, request.password)


@router.get("/me", response_model=UserResponse)
async def get_me(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Returns:
        UserResponse: User profile with id, email, display_name, etc.

    Raises:
        401: If not authenticated
    """
    return await run_in_threadpool(AuthService.get_me, user)
