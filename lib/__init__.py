# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for the signs table
# - sign_filter.py: Case-insensitive multi-field substring filtering
# - image_encoder.py: Photo type/size validation and data URL encoding
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.sign_filter import filter_signs, matches
from lib.image_encoder import (
    ALLOWED_IMAGE_TYPES,
    encode_image,
    to_data_url,
    validate_image,
    validate_upload,
)

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Filtering
    "filter_signs",
    "matches",
    # Images
    "ALLOWED_IMAGE_TYPES",
    "encode_image",
    "to_data_url",
    "validate_image",
    "validate_upload",
]
