# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Modern E-commerce payment server.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 4242
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    StorefrontException,
    http_exception_handler,
    storefront_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import health, payments, webhooks
from app.auth import routes as auth_routes
from lib.stripe_client import StripeClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: configure the Stripe SDK once, log the banner
    - Shutdown: log
    """
    StripeClient.configure()

    logger.info("Modern E-commerce Stripe Server Started!")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Listening on port {settings.PORT}")

    yield

    logger.info("Shutting down Modern E-commerce Stripe Server")


# Create FastAPI application
app = FastAPI(
    title="Modern E-commerce Payment API",
    description="""
## Stripe payments and accounts for the Modern E-commerce storefront

### Payments

1. **Create a payment intent** - `POST /create-payment-intent` with an amount in cents
2. **Confirm on the client** - pass `clientSecret` to Stripe.js
3. **Webhook** - Stripe reports the outcome to `POST /webhook`

### Accounts

- `POST /api/auth/signup`, `POST /api/auth/signin` return a bearer token
- `GET /api/auth/me` requires `Authorization: Bearer <token>`
""",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Root", "description": "Server info and health checks"},
        {"name": "Payments", "description": "Stripe payment intents"},
        {"name": "Webhooks", "description": "Signed Stripe event deliveries"},
        {"name": "Auth", "description": "Sign-up, sign-in and current user"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests from the storefront
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=settings.is_production,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(StorefrontException, storefront_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Root info and health checks
app.include_router(health.router, tags=["Root"])

# Payment intent creation
app.include_router(payments.router, tags=["Payments"])

# Stripe webhook relay
app.include_router(webhooks.router, tags=["Webhooks"])

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)


def main() -> None:
    """Run the server with uvicorn on the configured host and port."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
