# =============================================================================
# app/routers/payments.py - Payment Intent Endpoint
# =============================================================================
# Creates Stripe payment intents for the storefront checkout.
# =============================================================================

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from core.models.payment import PaymentIntentRequest, PaymentIntentResponse
from core.services.payment_service import PaymentService

router = APIRouter()


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    response_model_by_alias=True,
)
async def create_payment_intent(request: PaymentIntentRequest | None = None):
    """
    Create a card payment intent.

    Returns the client secret used by Stripe.js to confirm the payment,
    plus the intent id for later reconciliation. An empty body is treated
    as a request without an amount.

    Errors:
    - 400: amount missing, below 50, card or parameter error
    - 401: Stripe rejected the API key
    - 429: Stripe rate limit
    - 500: Stripe outage or network error
    """
    return await run_in_threadpool(
        PaymentService.create_payment_intent, request or PaymentIntentRequest()
    )
