# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - sign.py: Sign records, insert payloads, search filters and responses
#
# These models define the "contract" between API and clients.
# =============================================================================

from .sign import (
    SEARCH_FIELDS,
    SIGN_COLORS,
    SIGN_SHAPES,
    SearchFilters,
    SignCreate,
    SignList,
    SignOptions,
    SignRecord,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    "SEARCH_FIELDS",
    "SIGN_COLORS",
    "SIGN_SHAPES",
    "SearchFilters",
    "SignCreate",
    "SignList",
    "SignOptions",
    "SignRecord",
]
