# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sample sign rows and an API client with a mocked store
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds the app at import time from these settings

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("UPLOAD_PASSWORD", "SignDB2024!")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-signing")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings


TEST_PASSWORD = "SignDB2024!"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_sign_rows():
    """Rows as the store returns them, newest upload first."""
    return [
        {
            "id": "sign-3",
            "photo": "data:image/png;base64,AAAA",
            "sign_details": "Stop sign at 4-way intersection",
            "sign_type": "Regulatory",
            "mutcd_name": "Stop",
            "mutcd_code": "R1-1",
            "legend_color": "White",
            "background_color": "Red",
            "sign_shape": "Octagon",
            "upload_date": "2024-03-01T09:00:00Z",
            "created_at": "2024-03-01T09:00:01Z",
        },
        {
            "id": "sign-2",
            "photo": "data:image/jpeg;base64,BBBB",
            "sign_details": "Sharp curve to the right",
            "sign_type": "Warning",
            "mutcd_name": "Curve",
            "mutcd_code": "W1-2R",
            "legend_color": "Black",
            "background_color": "Yellow",
            "sign_shape": "Diamond",
            "upload_date": "2024-02-01T09:00:00Z",
            "created_at": "2024-02-01T09:00:01Z",
        },
        {
            "id": "sign-1",
            "photo": "data:image/webp;base64,CCCC",
            "sign_details": "Interstate exit guide",
            "sign_type": "Guide",
            "mutcd_name": "Exit Direction",
            "mutcd_code": "E1-5P",
            "legend_color": "White",
            "background_color": "Green",
            "sign_shape": "Rectangle",
            "upload_date": "2024-01-01T09:00:00Z",
            "created_at": "2024-01-01T09:00:01Z",
        },
    ]


@pytest.fixture
def sign_form_data():
    """Upload form fields for a valid sign."""
    return {
        "sign_details": "Yield at roundabout entry",
        "sign_type": "Regulatory",
        "mutcd_name": "Yield",
        "mutcd_code": "R1-2",
        "legend_color": "Red",
        "background_color": "White",
        "sign_shape": "Triangle",
    }


@pytest.fixture
def png_bytes():
    """A tiny PNG header (content isn't decoded, only encoded)."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def catalog_service(sample_sign_rows):
    """A CatalogService loaded from a mocked store."""
    from unittest.mock import patch

    from core.services.catalog_service import CatalogService

    service = CatalogService()
    with patch("core.services.sign_service.SupabaseClient") as mock:
        mock.fetch_signs.return_value = sample_sign_rows
        service.load()
    return service


@pytest.fixture
def client(catalog_service):
    """API client whose catalog dependency points at the test service."""
    from app.dependencies import get_catalog_service
    from app.main import app

    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def authorized_client(client):
    """API client that has passed the upload password gate."""
    response = client.post("/api/v1/auth/authorize", json={"password": TEST_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def settings():
    return get_settings()
