# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.config import settings
from lib.stripe_client import StripeClient
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

router = APIRouter()

SERVER_MESSAGE = "Modern E-commerce Stripe Payment Server is running!"


# =============================================================================
# Response Models
# =============================================================================

class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str
    environment: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    payments: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/")
async def root():
    """
    Root endpoint - returns server info and the endpoint map.
    """
    return {
        "message": SERVER_MESSAGE,
        "timestamp": utc_now_iso(),
        "endpoints": {
            "health": "GET /",
            "createPayment": "POST /create-payment-intent",
            "webhook": "POST /webhook",
            "auth": {
                "signup": "POST /api/auth/signup",
                "signin": "POST /api/auth/signin",
                "getMe": "GET /api/auth/me",
            },
        },
    }


@router.get("/health", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=utc_now_iso(),
        environment=settings.ENVIRONMENT,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Checks database connectivity and that Stripe has been configured.
    """
    checks = ChecksResponse(database="unknown", payments="unknown")

    # Check database
    try:
        await run_in_threadpool(SupabaseClient.ping)
        checks.database = "healthy"
    except Exception as e:
        checks.database = f"unhealthy: {str(e)[:50]}"

    # Check Stripe configuration (no API call)
    checks.payments = "healthy" if StripeClient.is_configured() else "unconfigured"

    all_healthy = checks.database == "healthy" and checks.payments == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=utc_now_iso(),
    )
