# =============================================================================
# core/services/auth_service.py - Account Business Logic
# =============================================================================
# Sign-up, sign-in and profile lookup. Credential storage, password hashing
# and token issuance are delegated to Supabase Auth.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from supabase import AuthApiError, AuthError

from app.auth.models import AuthResponse, AuthUser, UserResponse
from app.exceptions import (
    IdentityProviderError,
    InvalidCredentialsError,
    SignupRejectedError,
)
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


def _user_response(user: Any, profile: dict[str, Any] | None = None) -> UserResponse:
    """Build a UserResponse from a Supabase auth user and optional profile row."""
    metadata = getattr(user, "user_metadata", None) or {}
    profile = profile or {}
    return UserResponse(
        id=UUID(str(user.id)),
        email=profile.get("email") or user.email,
        display_name=profile.get("display_name") or metadata.get("display_name"),
        created_at=profile.get("created_at") or getattr(user, "created_at", None),
        updated_at=profile.get("updated_at"),
    )


def _is_provider_fault(error: AuthApiError) -> bool:
    """Rate limits and 5xx answers are Supabase's problem, not the caller's."""
    status = getattr(error, "status", None) or 0
    return status == 429 or status >= 500


def _auth_response(user: UserResponse, session: Any) -> AuthResponse:
    if session is None:
        return AuthResponse(user=user)
    return AuthResponse(
        user=user,
        token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
        token_type=session.token_type or "bearer",
    )


class AuthService:
    """
    Service for account operations.

    Provides a clean interface between the auth routes and Supabase.
    """

    @staticmethod
    def signup(email: str, password: str, name: str | None = None) -> AuthResponse:
        """
        Create an account and its profile row.

        Args:
            email: Account email
            password: Plain-text password, hashed by Supabase Auth
            name: Optional display name

        Returns:
            AuthResponse (token is None if email confirmation is pending)

        Raises:
            SignupRejectedError: If Supabase refuses the account
            IdentityProviderError: If Supabase can't be reached
        """
        email = email.strip().lower()

        try:
            result = SupabaseClient.sign_up(email, password, display_name=name)
        except AuthApiError as e:
            if _is_provider_fault(e):
                logger.error(f"Sign-up failed for {email}: {e.status} {e.message}")
                raise IdentityProviderError(e.message)
            logger.info(f"Sign-up rejected for {email}: {e.message}")
            raise SignupRejectedError(e.message)
        except (AuthError, SupabaseClientError) as e:
            logger.error(f"Sign-up failed for {email}: {e}")
            raise IdentityProviderError(str(e))

        if result.user is None:
            raise SignupRejectedError("Sign-up was not accepted")

        profile = None
        try:
            profile = SupabaseClient.upsert_user_profile(
                result.user.id,
                email=result.user.email,
                display_name=name,
            )
        except SupabaseClientError as e:
            # The account exists; GET /me falls back to token claims
            logger.warning(f"Could not store profile for {result.user.id}: {e}")

        logger.info(f"Created account {result.user.id} ({email})")
        return _auth_response(_user_response(result.user, profile), result.session)

    @staticmethod
    def signin(email: str, password: str) -> AuthResponse:
        """
        Authenticate with email and password.

        Returns:
            AuthResponse with access and refresh tokens

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            IdentityProviderError: If Supabase can't be reached
        """
        email = email.strip().lower()

        try:
            result = SupabaseClient.sign_in(email, password)
        except AuthApiError as e:
            if _is_provider_fault(e):
                logger.error(f"Sign-in failed for {email}: {e.status} {e.message}")
                raise IdentityProviderError(e.message)
            logger.info(f"Sign-in rejected for {email}: {e.message}")
            raise InvalidCredentialsError()
        except (AuthError, SupabaseClientError) as e:
            logger.error(f"Sign-in failed for {email}: {e}")
            raise IdentityProviderError(str(e))

        if result.user is None or result.session is None:
            raise InvalidCredentialsError()

        logger.info(f"User {result.user.id} signed in")
        return _auth_response(_user_response(result.user), result.session)

    @staticmethod
    def get_me(user: AuthUser) -> UserResponse:
        """
        Get the profile of an authenticated user.

        Falls back to the token claims when the profile row is missing or
        the profile table can't be read.
        """
        try:
            profile = SupabaseClient.fetch_user_profile(user.id)
            if profile:
                return UserResponse(**profile)
        except SupabaseClientError as e:
            logger.warning(f"Could not fetch user profile: {e}")

        return UserResponse(id=user.id, email=user.email)
