# =============================================================================
# core/services/webhook_service.py - Stripe Webhook Relay
# =============================================================================
# Verifies signed Stripe deliveries and dispatches them by event type.
# Handlers only log; no state is changed.
# =============================================================================

import logging
from typing import Any, Callable

import stripe

from app.exceptions import WebhookVerificationError
from core.models.webhook import WebhookAck, WebhookEventType
from lib.stripe_client import StripeClient

logger = logging.getLogger(__name__)


def _field(obj: Any, name: str) -> Any:
    """Read an attribute of a Stripe object, None when Stripe omitted it."""
    return getattr(obj, name, None) if obj is not None else None


def _handle_payment_succeeded(obj: Any) -> None:
    logger.info(
        f"PaymentIntent {_field(obj, 'id')} succeeded "
        f"(amount: {_field(obj, 'amount')} {_field(obj, 'currency') or ''})"
    )


def _handle_payment_failed(obj: Any) -> None:
    reason = _field(_field(obj, "last_payment_error"), "message") or "no error message"
    logger.info(f"PaymentIntent {_field(obj, 'id')} failed: {reason}")


def _handle_payment_method_attached(obj: Any) -> None:
    logger.info(
        f"PaymentMethod {_field(obj, 'id')} attached to customer {_field(obj, 'customer')}"
    )


EVENT_HANDLERS: dict[str, Callable[[Any], None]] = {
    WebhookEventType.PAYMENT_INTENT_SUCCEEDED.value: _handle_payment_succeeded,
    WebhookEventType.PAYMENT_INTENT_FAILED.value: _handle_payment_failed,
    WebhookEventType.PAYMENT_METHOD_ATTACHED.value: _handle_payment_method_attached,
}


class WebhookService:
    """Service for verifying and dispatching Stripe webhook events."""

    @staticmethod
    def verify(payload: bytes, signature: str | None) -> stripe.Event:
        """
        Verify a delivery and return the parsed event.

        Raises:
            WebhookVerificationError: If the signature or payload is invalid
        """
        try:
            return StripeClient.construct_event(payload, signature)
        except stripe.SignatureVerificationError as e:
            logger.warning(f"Webhook signature verification failed: {e}")
            raise WebhookVerificationError(str(e)) from e
        except ValueError as e:
            logger.warning(f"Webhook payload could not be parsed: {e}")
            raise WebhookVerificationError(str(e)) from e

    @staticmethod
    def dispatch(event_type: str, obj: Any) -> bool:
        """
        Run the handler registered for an event type.

        Args:
            event_type: Stripe event type, e.g. "payment_intent.succeeded"
            obj: The event's data.object (a Stripe object)

        Returns:
            True if a handler ran, False for unhandled types
        """
        handler = EVENT_HANDLERS.get(event_type)
        if handler is None:
            logger.info(f"Unhandled event type {event_type}")
            return False
        handler(obj)
        return True

    @staticmethod
    def handle(payload: bytes, signature: str | None) -> WebhookAck:
        """
        Verify, dispatch and acknowledge a webhook delivery.

        Args:
            payload: Raw request body
            signature: stripe-signature header value

        Returns:
            WebhookAck, for handled and unhandled event types alike

        Raises:
            WebhookVerificationError: If verification fails
        """
        event = WebhookService.verify(payload, signature)

        event_type = _field(event, "type")
        logger.debug(f"Received webhook event {_field(event, 'id')} ({event_type})")

        WebhookService.dispatch(event_type, _field(_field(event, "data"), "object"))
        return WebhookAck()
