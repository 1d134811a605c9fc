# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a TestClient, a mocked Stripe create call, webhook signing
#   and access-token helpers
# Stripe and Supabase are never contacted.
# =============================================================================

import hashlib
import hmac
import json
import os
import time
from unittest.mock import MagicMock, patch
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy_key")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-0123456789abcdef")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.config import settings
from app.main import app


# =============================================================================
# Helpers
# =============================================================================

def sign_webhook_payload(payload: str, secret: str | None = None, timestamp: int | None = None) -> str:
    """Build a stripe-signature header the way Stripe signs deliveries."""
    secret = secret or settings.STRIPE_WEBHOOK_SECRET
    timestamp = timestamp or int(time.time())
    signed_payload = f"{timestamp}.{payload}"
    signature = hmac.new(
        secret.encode("utf-8"),
        signed_payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return f"t={timestamp},v1={signature}"


def make_event(event_type: str, obj: dict | None = None) -> str:
    """Serialize a minimal Stripe event."""
    return json.dumps({
        "id": "evt_test_123",
        "object": "event",
        "type": event_type,
        "data": {"object": obj or {"id": "pi_test_123", "object": "payment_intent"}},
    })


def make_access_token(
    user_id: str | None = None,
    email: str = "shopper@example.com",
    expires_in: int = 3600,
    secret: str | None = None,
    audience: str = "authenticated",
) -> str:
    """Mint an HS256 access token shaped like a Supabase one."""
    now = int(time.time())
    claims = {
        "sub": user_id or str(uuid4()),
        "email": email,
        "aud": audience,
        "role": "authenticated",
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(claims, secret or settings.SUPABASE_JWT_SECRET, algorithm="HS256")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """TestClient with lifespan run; server errors become 500 responses."""
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def mock_stripe_create():
    """Patch stripe.PaymentIntent.create with a successful intent."""
    intent = MagicMock()
    intent.id = "pi_test_123"
    intent.client_secret = "pi_test_123_secret_abc"
    with patch("stripe.PaymentIntent.create", return_value=intent) as mock_create:
        yield mock_create


@pytest.fixture
def user_id():
    return str(uuid4())


@pytest.fixture
def auth_headers(user_id):
    return {"Authorization": f"Bearer {make_access_token(user_id=user_id)}"}
