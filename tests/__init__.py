# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the payment server:
# - test_payments.py: Payment intent validation, Stripe call and error mapping
# - test_webhooks.py: Signed webhook verification and dispatch
# - test_auth.py: Sign-up, sign-in and the protected /me endpoint
# - test_app.py: Root info, health checks, 404 and 500 handling
# - test_models.py: Models, settings and utilities
#
# Run tests with: pytest
# =============================================================================
