# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the catalog's business logic:
# - models/: Pydantic schemas for sign records and search filters
# - catalog.py: Immutable in-memory sign collection
# - services/: Store access and displayed-catalog state
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================
