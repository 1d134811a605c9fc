# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Root info and health check endpoints
# - payments.py: Payment intent creation
# - webhooks.py: Stripe webhook relay
#
# Auth routes live in app/auth/. Each router is mounted in main.py.
# =============================================================================

from . import health
from . import payments
from . import webhooks

__all__ = [
    "health",
    "payments",
    "webhooks",
]
