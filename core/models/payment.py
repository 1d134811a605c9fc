# =============================================================================
# core/models/payment.py - Payment Schemas
# =============================================================================
# These models define the API contract for payment intent creation:
# - PaymentIntentRequest: Body of POST /create-payment-intent
# - PaymentIntentResponse: What the storefront needs to confirm the payment
#
# Amounts are in minor currency units (cents for USD). Nothing here is
# persisted - the intent itself lives in Stripe.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Stripe's minimum charge for USD, in cents
MINIMUM_AMOUNT = 50

DEFAULT_CURRENCY = "usd"


class PaymentIntentRequest(BaseModel):
    """
    Schema for creating a payment intent.

    The amount is optional here so that a missing amount gets the
    "Amount is required" message rather than a generic validation error.

    Example:
        {
            "amount": 1999,
            "currency": "usd",
            "metadata": {"order_id": "A-1001"}
        }
    """

    amount: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Amount in minor currency units (e.g. 1999 = $19.99)"
    )

    currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=1,
        description="Three-letter ISO currency code"
    )

    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Arbitrary key/value pairs stored on the payment intent"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"amount": 1999, "currency": "usd", "metadata": {"order_id": "A-1001"}},
                {"amount": 500},
            ]
        }
    )


class PaymentIntentResponse(BaseModel):
    """
    Schema returned after a payment intent is created.

    The client secret is passed to Stripe.js to confirm the card payment.
    """

    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(..., alias="clientSecret")
    payment_intent_id: str = Field(..., alias="paymentIntentId")
