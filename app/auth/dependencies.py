# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides the "protect" step for authenticated routes.
#
# Access tokens are issued by Supabase Auth; we only verify them:
# - Asymmetric tokens (ES256/RS256) via the project's JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
import time
from typing import Any, Optional
from uuid import UUID

import httpx
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import settings
from app.auth.models import AuthUser, TokenPayload
from app.exceptions import NotAuthorizedError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; a missing header is reported by get_current_user
security = HTTPBearer(auto_error=False)

TOKEN_AUDIENCE = "authenticated"

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url() -> str:
    """Get the JWKS URL from Supabase URL."""
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks() -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    # Return cached if valid
    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        jwks_url = _get_jwks_url()
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Stale keys are better than none
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str) -> tuple[Any, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    unverified_header = jwt.get_unverified_header(token)

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        for key in _fetch_jwks().get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    raise JWTError(f"No signing key found for alg={alg}, kid={kid}")


def decode_access_token(token: str) -> AuthUser:
    """
    Verify an access token and extract the user it was issued to.

    Raises:
        NotAuthorizedError: If the token is invalid, expired or malformed
    """
    try:
        signing_key, algorithm = _get_signing_key(token)
        claims = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience=TOKEN_AUDIENCE,
        )
        payload = TokenPayload(**claims)
        user_id = UUID(payload.sub)

    except ExpiredSignatureError:
        logger.warning("Access token has expired")
        raise NotAuthorizedError("Not authorized, token expired")

    except (JWTError, ValidationError, ValueError) as e:
        logger.warning(f"Access token validation failed: {e}")
        raise NotAuthorizedError("Not authorized, token failed")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_id, email=payload.email)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Protect a route: require a valid Bearer token.

    Runs before the route handler; on failure the handler is never called.
    Declared sync so FastAPI runs it in the threadpool, since a cold JWKS
    cache means a blocking fetch.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        AuthUser: The authenticated user

    Raises:
        NotAuthorizedError: 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise NotAuthorizedError()

    return decode_access_token(credentials.credentials)
