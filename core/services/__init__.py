# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .payment_service import PaymentService
from .webhook_service import WebhookService
from .auth_service import AuthService

__all__ = [
    "PaymentService",
    "WebhookService",
    "AuthService",
]
