# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - payment.py: Payment intent request/response schemas
# - webhook.py: Handled Stripe event types and the webhook acknowledgement
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Payment Models - Stripe payment intents
# -----------------------------------------------------------------------------
from .payment import (
    DEFAULT_CURRENCY,
    MINIMUM_AMOUNT,
    PaymentIntentRequest,
    PaymentIntentResponse,
)

# -----------------------------------------------------------------------------
# Webhook Models - Stripe event relay
# -----------------------------------------------------------------------------
from .webhook import (
    WebhookAck,
    WebhookEventType,
)

__all__ = [
    # Payment
    "DEFAULT_CURRENCY",
    "MINIMUM_AMOUNT",
    "PaymentIntentRequest",
    "PaymentIntentResponse",
    # Webhook
    "WebhookAck",
    "WebhookEventType",
]
