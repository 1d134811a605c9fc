# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the Supabase operations behind the
# auth endpoints:
# - A singleton service-role client for the public.users profile table
# - Short-lived anon clients for sign-up / sign-in, so a signed-in user's
#   session never lands on the shared client
#
# Password hashing and token issuance are done by Supabase Auth.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   profile = SupabaseClient.fetch_user_profile(user_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client
from supabase.client import ClientOptions

from app.config import settings
from lib.utils import ApplicationError, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("code", "SUPABASE_ERROR")
        super().__init__(message, **kwargs)


class SupabaseClient:
    """
    Typed wrapper for Supabase database and auth operations.

    Implements singleton pattern - one service-role client instance is shared
    across the application. All methods are class methods for easy access
    without instantiation.

    Example:
        profile = SupabaseClient.fetch_user_profile("550e8400-...")
        display_name = profile.get("display_name") if profile else None
    """

    USERS_TABLE = "users"

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def create_auth_client(cls) -> Client:
        """
        Create a fresh anon-key client for a single auth call.

        Session persistence and token auto-refresh are disabled: the tokens
        are handed straight back to the caller.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            return create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_ANON_KEY,
                options=ClientOptions(
                    auto_refresh_token=False,
                    persist_session=False,
                ),
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase auth client: {e}",
                code="AUTH_CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    # -------------------------------------------------------------------------
    # Auth
    # -------------------------------------------------------------------------

    @classmethod
    def sign_up(
        cls,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> Any:
        """
        Register a new account with Supabase Auth.

        Returns:
            AuthResponse with .user and .session (session is None when email
            confirmation is required)

        Raises:
            supabase.AuthError: If Supabase rejects the sign-up
        """
        client = cls.create_auth_client()
        credentials: dict[str, Any] = {"email": email, "password": password}
        if display_name:
            credentials["options"] = {"data": {"display_name": display_name}}
        return client.auth.sign_up(credentials)

    @classmethod
    def sign_in(cls, email: str, password: str) -> Any:
        """
        Exchange email and password for a session.

        Returns:
            AuthResponse with .user and .session

        Raises:
            supabase.AuthError: If the credentials are rejected
        """
        client = cls.create_auth_client()
        return client.auth.sign_in_with_password({"email": email, "password": password})

    # -------------------------------------------------------------------------
    # User Profiles
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user_profile(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a row from public.users.

        Args:
            user_id: The auth user UUID

        Returns:
            Profile dict, or None if no row exists yet

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table(cls.USERS_TABLE)
                .select("*")
                .eq("id", user_id_str)
                .single()
                .execute()
            )
            return response.data or None

        except Exception as e:
            # PGRST116 = no rows for .single()
            if "PGRST116" in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch user profile: {e}",
                code="FETCH_PROFILE_FAILED",
                details={"user_id": user_id_str}
            )

    @classmethod
    def upsert_user_profile(
        cls,
        user_id: str | UUID,
        email: str | None,
        display_name: str | None = None,
    ) -> dict[str, Any]:
        """
        Create or update the public.users row for an auth user.

        Returns:
            The stored profile row

        Raises:
            SupabaseClientError: If the write fails
        """
        client = cls.get_client()
        user_id_str = normalize_uuid(user_id)

        data = {
            "id": user_id_str,
            "email": email,
            "display_name": display_name,
        }

        try:
            response = client.table(cls.USERS_TABLE).upsert(data).execute()
            logger.debug(f"Upserted profile for user {user_id_str}")
            return response.data[0] if response.data else data

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to save user profile: {e}",
                code="UPSERT_PROFILE_FAILED",
                suggestion="Check that the users table exists and the service key can write to it",
                details={"user_id": user_id_str}
            )

    @classmethod
    def ping(cls) -> None:
        """
        Run a trivial query to check connectivity.

        Raises:
            Exception: Whatever the client raises when the database is unreachable
        """
        cls.get_client().table(cls.USERS_TABLE).select("id").limit(1).execute()
