# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response carries an "error" key with a human-readable message,
# which is the shape storefront clients already parse.
# =============================================================================

import logging
from typing import Any

import stripe
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings

logger = logging.getLogger(__name__)


# Listed in every 404 response so clients can discover the API surface.
AVAILABLE_ENDPOINTS = [
    "GET /",
    "POST /create-payment-intent",
    "POST /webhook",
    "POST /api/auth/signup",
    "POST /api/auth/signin",
    "GET /api/auth/me",
]


class StorefrontException(Exception):
    """
    Base exception for the storefront API.

    All HTTP-facing errors inherit from this class and are rendered by
    storefront_exception_handler.
    """

    def __init__(
        self,
        message: str,
        code: str = "STOREFRONT_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {"error": self.message}
        result.update(self.details)
        return result

    def to_response(self) -> Response:
        return JSONResponse(status_code=self.status_code, content=self.to_dict())


# =============================================================================
# Payment Exceptions
# =============================================================================

class AmountRequiredError(StorefrontException):
    """Raised when a payment request has no amount."""

    def __init__(self):
        super().__init__(
            message="Amount is required",
            code="AMOUNT_REQUIRED",
            status_code=400,
        )


class AmountTooSmallError(StorefrontException):
    """Raised when the amount is below Stripe's 50 minor-unit minimum."""

    def __init__(self):
        super().__init__(
            message="Amount must be at least $0.50 (50 cents)",
            code="AMOUNT_TOO_SMALL",
            status_code=400,
        )


class PaymentProviderError(StorefrontException):
    """Raised when Stripe rejects or fails a request."""

    @classmethod
    def from_stripe_error(cls, error: Exception) -> "PaymentProviderError":
        """
        Map a Stripe SDK error onto a status code and client-facing message.

        Card errors carry Stripe's own message since it is meant for the
        cardholder; every other category gets a fixed message.
        """
        if isinstance(error, stripe.CardError):
            message = getattr(error, "user_message", None) or str(error)
            return cls(message, code="CARD_ERROR", status_code=400)
        if isinstance(error, stripe.RateLimitError):
            return cls(
                "Too many requests. Please try again later.",
                code="RATE_LIMITED",
                status_code=429,
            )
        if isinstance(error, stripe.InvalidRequestError):
            return cls(
                "Invalid request parameters.",
                code="INVALID_REQUEST",
                status_code=400,
            )
        if isinstance(error, stripe.AuthenticationError):
            return cls(
                "Authentication error. Please check your API keys.",
                code="AUTHENTICATION_ERROR",
                status_code=401,
            )
        if isinstance(error, stripe.APIConnectionError):
            return cls(
                "Network error. Please check your connection.",
                code="CONNECTION_ERROR",
                status_code=500,
            )
        if isinstance(error, stripe.APIError):
            return cls(
                "Stripe API error. Please try again.",
                code="STRIPE_API_ERROR",
                status_code=500,
            )
        return cls(
            "An unexpected error occurred. Please try again.",
            code="UNEXPECTED_ERROR",
            status_code=500,
        )


class WebhookVerificationError(StorefrontException):
    """Raised when a webhook payload fails Stripe signature verification."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Webhook Error: {reason}",
            code="WEBHOOK_VERIFICATION_FAILED",
            status_code=400,
        )

    def to_response(self) -> Response:
        # Stripe's dashboard shows the raw body of failed deliveries
        return PlainTextResponse(status_code=self.status_code, content=self.message)


# =============================================================================
# Auth Exceptions
# =============================================================================

class NotAuthorizedError(StorefrontException):
    """Raised by the protect dependency when no valid bearer token is present."""

    def __init__(self, message: str = "Not authorized, no token"):
        super().__init__(
            message=message,
            code="NOT_AUTHORIZED",
            status_code=401,
        )

    def to_response(self) -> Response:
        response = super().to_response()
        response.headers["WWW-Authenticate"] = "Bearer"
        return response


class InvalidCredentialsError(StorefrontException):
    """Raised when sign-in fails."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


class SignupRejectedError(StorefrontException):
    """Raised when the identity provider refuses to create an account."""

    def __init__(self, reason: str):
        super().__init__(
            message=reason,
            code="SIGNUP_REJECTED",
            status_code=400,
        )


class IdentityProviderError(StorefrontException):
    """Raised when the identity provider cannot be reached or misbehaves."""

    def __init__(self, error: str):
        super().__init__(
            message="Authentication service unavailable. Please try again later.",
            code="IDENTITY_PROVIDER_ERROR",
            status_code=503,
        )
        self.error = error


# =============================================================================
# Exception Handlers
# =============================================================================

async def storefront_exception_handler(
    request: Request,
    exc: StorefrontException
) -> Response:
    """Convert StorefrontException to its HTTP response."""
    return exc.to_response()


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle routing-level HTTP errors.

    Unknown paths and known paths hit with the wrong method both answer 404
    with the list of available endpoints.
    """
    if exc.status_code in (404, 405):
        logger.info(f"Endpoint not found: {request.method} {request.url.path}")
        return JSONResponse(
            status_code=404,
            content={
                "error": "Endpoint not found",
                "availableEndpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "details": [
                {
                    "field": ".".join(str(part) for part in err.get("loc", ())[1:]),
                    "message": err.get("msg"),
                }
                for err in exc.errors()
            ],
        },
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions; the message is only exposed in development."""
    logger.exception(f"Server Error: {exc}")
    content: dict[str, Any] = {"error": "Internal server error"}
    if settings.is_development:
        content["message"] = str(exc)
    return JSONResponse(status_code=500, content=content)
