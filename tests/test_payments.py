# =============================================================================
# tests/test_payments.py - Payment Intent Tests
# =============================================================================
# Tests for POST /create-payment-intent:
# - Amount validation happens before Stripe is called
# - Stripe receives the rounded amount, lower-cased currency and metadata
# - Stripe errors map to the right status codes
#
# Run with: pytest tests/test_payments.py -v
# =============================================================================

import logging
from unittest.mock import patch

import pytest
import stripe

from app.exceptions import AmountRequiredError, AmountTooSmallError, PaymentProviderError
from core.models.payment import PaymentIntentRequest
from core.services.payment_service import PaymentService


# =============================================================================
# Validation
# =============================================================================

class TestAmountValidation:
    """Requests that must be rejected without calling Stripe."""

    def test_missing_amount(self, client, mock_stripe_create):
        """Test that a missing amount is rejected."""
        response = client.post("/create-payment-intent", json={"currency": "usd"})

        assert response.status_code == 400
        assert response.json() == {"error": "Amount is required"}
        mock_stripe_create.assert_not_called()

    def test_empty_body(self, client, mock_stripe_create):
        """Test that an empty body is treated as a missing amount."""
        response = client.post("/create-payment-intent")

        assert response.status_code == 400
        assert response.json() == {"error": "Amount is required"}
        mock_stripe_create.assert_not_called()

    def test_zero_amount_counts_as_missing(self, client, mock_stripe_create):
        response = client.post("/create-payment-intent", json={"amount": 0})

        assert response.status_code == 400
        assert response.json() == {"error": "Amount is required"}

    def test_amount_49(self, client, mock_stripe_create):
        """Test the exact message for an amount just under the minimum."""
        response = client.post("/create-payment-intent", json={"amount": 49})

        assert response.status_code == 400
        assert response.json() == {"error": "Amount must be at least $0.50 (50 cents)"}
        mock_stripe_create.assert_not_called()

    @pytest.mark.parametrize("amount", [1, 10, 49, 49.99, -100])
    def test_amounts_below_minimum(self, client, mock_stripe_create, amount):
        response = client.post("/create-payment-intent", json={"amount": amount})

        assert response.status_code == 400
        mock_stripe_create.assert_not_called()

    def test_non_numeric_amount(self, client, mock_stripe_create):
        response = client.post("/create-payment-intent", json={"amount": "lots"})

        assert response.status_code == 422
        assert response.json()["error"] == "Validation error"
        mock_stripe_create.assert_not_called()

    @pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_amount(self, client, mock_stripe_create, literal):
        """Test that JSON's non-standard number literals never reach rounding."""
        response = client.post(
            "/create-payment-intent",
            content=f'{{"amount": {literal}}}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "Validation error"
        mock_stripe_create.assert_not_called()


# =============================================================================
# Successful creation
# =============================================================================

class TestCreatePaymentIntent:
    """Requests that reach Stripe."""

    def test_returns_client_secret_and_id(self, client, mock_stripe_create):
        response = client.post("/create-payment-intent", json={"amount": 1999})

        assert response.status_code == 200
        assert response.json() == {
            "clientSecret": "pi_test_123_secret_abc",
            "paymentIntentId": "pi_test_123",
        }

    @pytest.mark.parametrize(
        "amount,expected",
        [(50, 50), (1999, 1999), (1999.4, 1999), (1999.5, 2000), (50.5, 51), (100000, 100000)],
    )
    def test_amount_is_rounded_to_integer(self, client, mock_stripe_create, amount, expected):
        """Test that Stripe always receives an integer amount."""
        client.post("/create-payment-intent", json={"amount": amount})

        sent = mock_stripe_create.call_args.kwargs["amount"]
        assert sent == expected
        assert isinstance(sent, int)

    def test_stripe_call_parameters(self, client, mock_stripe_create):
        """Test currency, payment methods, metadata and description."""
        client.post(
            "/create-payment-intent",
            json={"amount": 2500, "currency": "EUR", "metadata": {"order_id": "A-1001"}},
        )

        mock_stripe_create.assert_called_once()
        call_args = mock_stripe_create.call_args.kwargs
        assert call_args["currency"] == "eur"
        assert call_args["payment_method_types"] == ["card"]
        assert call_args["description"] == "Modern E-commerce Purchase"
        assert call_args["metadata"]["order_id"] == "A-1001"
        assert call_args["metadata"]["source"] == "modern-ecommerce"
        assert call_args["metadata"]["created_at"].endswith("Z")

    def test_logs_before_and_after_stripe_call(self, client, mock_stripe_create, caplog):
        with caplog.at_level(logging.INFO, logger="core.services.payment_service"):
            client.post("/create-payment-intent", json={"amount": 1999})

        messages = [record.getMessage() for record in caplog.records]
        assert "Creating payment intent for amount: $19.99" in messages
        assert "Payment intent created: pi_test_123" in messages
        assert messages.index("Creating payment intent for amount: $19.99") < messages.index(
            "Payment intent created: pi_test_123"
        )

    def test_default_currency_is_usd(self, client, mock_stripe_create):
        client.post("/create-payment-intent", json={"amount": 500})

        assert mock_stripe_create.call_args.kwargs["currency"] == "usd"

    def test_fixed_metadata_overrides_caller(self, client, mock_stripe_create):
        """Test that callers can't spoof the source tag."""
        client.post(
            "/create-payment-intent",
            json={"amount": 500, "metadata": {"source": "elsewhere"}},
        )

        assert mock_stripe_create.call_args.kwargs["metadata"]["source"] == "modern-ecommerce"


# =============================================================================
# Stripe error mapping
# =============================================================================

class TestStripeErrors:
    """Stripe failures surface with mapped status codes."""

    @pytest.mark.parametrize(
        "error,status,message",
        [
            (
                stripe.CardError("Your card was declined.", "card", "card_declined"),
                400,
                "Your card was declined.",
            ),
            (
                stripe.RateLimitError("Too many requests"),
                429,
                "Too many requests. Please try again later.",
            ),
            (
                stripe.InvalidRequestError("No such currency", "currency"),
                400,
                "Invalid request parameters.",
            ),
            (
                stripe.APIError("Stripe is down"),
                500,
                "Stripe API error. Please try again.",
            ),
            (
                stripe.APIConnectionError("Connection reset"),
                500,
                "Network error. Please check your connection.",
            ),
            (
                stripe.AuthenticationError("Invalid API Key"),
                401,
                "Authentication error. Please check your API keys.",
            ),
            (
                stripe.PermissionError("Not allowed"),
                500,
                "An unexpected error occurred. Please try again.",
            ),
        ],
    )
    def test_error_mapping(self, client, error, status, message):
        with patch("stripe.PaymentIntent.create", side_effect=error) as mock_create:
            response = client.post("/create-payment-intent", json={"amount": 1999})

        assert response.status_code == status
        assert response.json() == {"error": message}
        mock_create.assert_called_once()

    def test_non_stripe_error_is_generic(self, client):
        with patch("stripe.PaymentIntent.create", side_effect=RuntimeError("socket gone")):
            response = client.post("/create-payment-intent", json={"amount": 1999})

        assert response.status_code == 500
        assert response.json() == {"error": "An unexpected error occurred. Please try again."}


# =============================================================================
# Service layer
# =============================================================================

class TestPaymentService:
    """Direct tests of PaymentService without HTTP."""

    def test_validate_amount_missing(self):
        with pytest.raises(AmountRequiredError):
            PaymentService.validate_amount(None)

    def test_validate_amount_too_small(self):
        with pytest.raises(AmountTooSmallError):
            PaymentService.validate_amount(49.9)

    def test_validate_amount_rounds(self):
        assert PaymentService.validate_amount(50.5) == 51

    def test_build_metadata_keeps_caller_keys(self):
        metadata = PaymentService.build_metadata({"cart": "3 items"})

        assert metadata["cart"] == "3 items"
        assert metadata["source"] == "modern-ecommerce"
        assert "created_at" in metadata

    def test_provider_error_chains_stripe_error(self, mock_stripe_create):
        error = stripe.APIError("boom")
        mock_stripe_create.side_effect = error

        with pytest.raises(PaymentProviderError) as exc_info:
            PaymentService.create_payment_intent(PaymentIntentRequest(amount=1000))

        assert exc_info.value.status_code == 500
        assert exc_info.value.__cause__ is error
