# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - stripe_client.py: Stripe SDK wrapper (payment intents, webhook verification)
# - supabase_client.py: Supabase wrapper (auth and the users profile table)
# - utils.py: Shared utilities (error base class, rounding, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.stripe_client import StripeClient, StripeClientError
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError, normalize_uuid, round_half_up

__all__ = [
    # Stripe
    "StripeClient",
    "StripeClientError",
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "ApplicationError",
    "normalize_uuid",
    "round_half_up",
]
