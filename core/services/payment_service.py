# =============================================================================
# core/services/payment_service.py - Payment Intent Business Logic
# =============================================================================
# Validates payment requests and creates Stripe payment intents.
# Separates HTTP concerns from Stripe calls and error mapping.
# =============================================================================

import logging
from typing import Any

import stripe

from app.exceptions import AmountRequiredError, AmountTooSmallError, PaymentProviderError
from core.models.payment import MINIMUM_AMOUNT, PaymentIntentRequest, PaymentIntentResponse
from lib.stripe_client import StripeClient
from lib.utils import format_minor_units, round_half_up, utc_now_iso

logger = logging.getLogger(__name__)


class PaymentService:
    """
    Service for payment intent operations.

    Provides a clean interface between the payment route and Stripe.
    """

    METADATA_SOURCE = "modern-ecommerce"
    DESCRIPTION = "Modern E-commerce Purchase"

    @staticmethod
    def validate_amount(amount: float | None) -> int:
        """
        Check an amount against the minimum and round it to an integer.

        Args:
            amount: Amount in minor units as sent by the client

        Returns:
            The amount rounded half-up to an integer

        Raises:
            AmountRequiredError: If amount is missing or zero
            AmountTooSmallError: If amount is below 50
        """
        if not amount:
            raise AmountRequiredError()

        if amount < MINIMUM_AMOUNT:
            raise AmountTooSmallError()

        return round_half_up(amount)

    @staticmethod
    def build_metadata(metadata: dict[str, Any] | None) -> dict[str, Any]:
        """Merge caller metadata with the fixed source tag and creation time."""
        return {
            **(metadata or {}),
            "source": PaymentService.METADATA_SOURCE,
            "created_at": utc_now_iso(),
        }

    @staticmethod
    def create_payment_intent(request: PaymentIntentRequest) -> PaymentIntentResponse:
        """
        Create a card payment intent.

        Args:
            request: Validated request body

        Returns:
            PaymentIntentResponse with the client secret and intent id

        Raises:
            AmountRequiredError: If amount is missing
            AmountTooSmallError: If amount is below the minimum
            PaymentProviderError: If Stripe fails, with the mapped status code
        """
        amount = PaymentService.validate_amount(request.amount)

        logger.info(f"Creating payment intent for amount: {format_minor_units(request.amount)}")

        try:
            intent = StripeClient.create_payment_intent(
                amount=amount,
                currency=request.currency.lower(),
                metadata=PaymentService.build_metadata(request.metadata),
                description=PaymentService.DESCRIPTION,
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe Error: {type(e).__name__}: {e}")
            raise PaymentProviderError.from_stripe_error(e) from e
        except Exception as e:
            logger.exception(f"Unexpected error creating payment intent: {e}")
            raise PaymentProviderError.from_stripe_error(e) from e

        logger.info(f"Payment intent created: {intent.id}")

        return PaymentIntentResponse(
            client_secret=intent.client_secret,
            payment_intent_id=intent.id,
        )
