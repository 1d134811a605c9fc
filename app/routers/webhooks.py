# =============================================================================
# app/routers/webhooks.py - Stripe Webhook Endpoint
# =============================================================================
# Receives signed event deliveries from Stripe. The body must be read raw:
# the signature covers the exact bytes Stripe sent.
# =============================================================================

from fastapi import APIRouter, Header, Request

from core.models.webhook import WebhookAck
from core.services.webhook_service import WebhookService

router = APIRouter()


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None, alias="stripe-signature"),
):
    """
    Verify and acknowledge a Stripe event.

    Returns {"received": true} for every verified event, handled or not.
    A failed verification returns 400 with a plain-text "Webhook Error: ..." body.
    """
    payload = await request.body()
    return WebhookService.handle(payload, stripe_signature)
