# =============================================================================
# lib/stripe_client.py - Stripe Client Wrapper
# =============================================================================
# This module wraps the Stripe SDK for the two calls the server makes:
# - Creating card payment intents
# - Verifying signed webhook payloads
#
# The SDK is configured once at startup (API key, no network retries) and the
# module-level configuration is only read afterwards.
#
# Usage:
#   from lib.stripe_client import StripeClient
#   StripeClient.configure()
#   intent = StripeClient.create_payment_intent(amount=1999, currency="usd")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

import stripe

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class StripeClientError(ApplicationError):
    """Error configuring the Stripe SDK."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("code", "STRIPE_CLIENT_ERROR")
        super().__init__(message, **kwargs)


class StripeClient:
    """
    Thin wrapper around the Stripe SDK.

    All methods are class methods, mirroring SupabaseClient. Stripe SDK
    errors (stripe.StripeError subclasses) are not wrapped: callers need the
    error category to choose a response code.
    """

    PAYMENT_METHOD_TYPES = ["card"]

    _configured: bool = False

    @classmethod
    def configure(cls) -> None:
        """
        Apply the API key and retry policy to the Stripe SDK.

        Raises:
            StripeClientError: If STRIPE_SECRET_KEY is empty
        """
        if not settings.STRIPE_SECRET_KEY:
            raise StripeClientError(
                "Stripe secret key is not set",
                code="MISSING_API_KEY",
                suggestion="Set STRIPE_SECRET_KEY in your .env file",
            )

        stripe.api_key = settings.STRIPE_SECRET_KEY
        # Failures are reported to the caller immediately
        stripe.max_network_retries = 0
        cls._configured = True

        mode = "live" if settings.STRIPE_SECRET_KEY.startswith("sk_live_") else "test"
        logger.info(f"Stripe client configured ({mode} mode)")

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def _ensure_configured(cls) -> None:
        if not cls._configured:
            cls.configure()

    # -------------------------------------------------------------------------
    # Payment Intents
    # -------------------------------------------------------------------------

    @classmethod
    def create_payment_intent(
        cls,
        amount: int,
        currency: str,
        metadata: dict[str, Any] | None = None,
        description: str | None = None,
    ) -> stripe.PaymentIntent:
        """
        Create a card-only payment intent.

        Args:
            amount: Amount in minor currency units (already an integer)
            currency: Three-letter ISO currency code, lower-case
            metadata: Key/value pairs stored on the intent
            description: Description shown in the Stripe dashboard

        Returns:
            The created stripe.PaymentIntent

        Raises:
            stripe.StripeError: Any error reported by the Stripe API
        """
        cls._ensure_configured()

        params: dict[str, Any] = {
            "amount": amount,
            "currency": currency,
            "payment_method_types": cls.PAYMENT_METHOD_TYPES,
            "metadata": metadata or {},
        }
        if description:
            params["description"] = description

        return stripe.PaymentIntent.create(**params)

    # -------------------------------------------------------------------------
    # Webhooks
    # -------------------------------------------------------------------------

    @classmethod
    def construct_event(cls, payload: bytes, signature: str | None) -> stripe.Event:
        """
        Verify a webhook payload against the endpoint secret and parse it.

        Args:
            payload: Raw request body, exactly as received
            signature: Value of the stripe-signature header

        Returns:
            The verified stripe.Event

        Raises:
            stripe.SignatureVerificationError: If the signature doesn't match
            ValueError: If the payload isn't valid JSON
        """
        return stripe.Webhook.construct_event(
            payload,
            signature or "",
            settings.STRIPE_WEBHOOK_SECRET,
        )
