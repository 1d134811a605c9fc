# =============================================================================
# core/models/webhook.py - Webhook Schemas
# =============================================================================
# Stripe event types the server reacts to, and the acknowledgement returned
# to Stripe after every verified delivery.
# =============================================================================

from enum import Enum

from pydantic import BaseModel


class WebhookEventType(str, Enum):
    """
    Stripe event types with a dedicated handler.

    Any other type is acknowledged and logged as unhandled.
    """
    PAYMENT_INTENT_SUCCEEDED = "payment_intent.succeeded"
    PAYMENT_INTENT_FAILED = "payment_intent.payment_failed"
    PAYMENT_METHOD_ATTACHED = "payment_method.attached"


class WebhookAck(BaseModel):
    """Acknowledgement body; Stripe only checks for a 2xx status."""
    received: bool = True
