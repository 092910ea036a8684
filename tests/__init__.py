# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the SignDB API:
# - test_sign_filter.py: Catalog search filtering
# - test_access_gate.py: Upload password gate and session tokens
# - test_image_encoder.py: Photo validation and data URL encoding
# - test_models.py: Pydantic model validation
# - test_catalog.py: Catalog value and store services
# - test_supabase_client.py: Query chains sent to Supabase
# - test_config.py: Settings and misconfiguration handling
# - test_api.py: Endpoint tests via TestClient
#
# Run tests with: pytest
# =============================================================================
