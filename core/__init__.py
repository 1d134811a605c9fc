# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the routes:
# - models/: Pydantic schemas for payments and webhooks
# - services/: Payment, webhook and account services
#
# Routers stay thin and delegate to the services here.
# =============================================================================
