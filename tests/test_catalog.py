# =============================================================================
# tests/test_catalog.py - Catalog and Store Service Tests
# =============================================================================
# This module contains tests for:
# - SignCatalog value semantics (prepend, filter, lookup)
# - SignService with mocked Supabase
# - CatalogService load / add state handling
#
# Tests use mocked Supabase responses to avoid database calls.
# =============================================================================

import threading
from unittest.mock import patch

import pytest

from app.exceptions import CatalogUnavailableError, StoreError
from core.catalog import SignCatalog
from core.models.sign import SearchFilters, SignCreate, SignRecord
from core.services.catalog_service import CatalogService
from core.services.sign_service import SignService
from lib.supabase_client import SupabaseClientError


@pytest.fixture
def records(sample_sign_rows):
    return [SignRecord.model_validate(row) for row in sample_sign_rows]


@pytest.fixture
def candidate(sign_form_data):
    return SignCreate(
        photo="data:image/png;base64,AAAA",
        upload_date="2024-04-01T12:00:00+00:00",
        **sign_form_data,
    )


@pytest.fixture
def stored_row(candidate):
    return {"id": "sign-4", "created_at": "2024-04-01T12:00:01Z", **candidate.model_dump()}


@pytest.fixture
def mock_supabase():
    """Patch the Supabase wrapper used by SignService."""
    with patch("core.services.sign_service.SupabaseClient") as mock:
        yield mock


# =============================================================================
# SignCatalog Tests
# =============================================================================

class TestSignCatalog:
    """SignCatalog is an immutable value."""

    def test_with_new_record_prepends(self, records):
        catalog = SignCatalog.from_records(records[1:])
        updated = catalog.with_new_record(records[0])

        assert len(updated) == len(catalog) + 1
        assert updated.records[0] is records[0]
        assert updated.records[1:] == catalog.records

    def test_original_is_untouched(self, records):
        catalog = SignCatalog.from_records(records[1:])
        catalog.with_new_record(records[0])
        assert len(catalog) == 2

    def test_filter(self, records):
        catalog = SignCatalog.from_records(records)
        assert [r.id for r in catalog.filter(SearchFilters(sign_type="warn"))] == ["sign-2"]
        assert catalog.filter() == records

    def test_get(self, records):
        catalog = SignCatalog.from_records(records)
        assert catalog.get("sign-1") is records[2]
        assert catalog.get("missing") is None


# =============================================================================
# SignService Tests
# =============================================================================

class TestSignService:
    """Store calls through the Supabase wrapper."""

    def test_list_signs(self, mock_supabase, sample_sign_rows):
        mock_supabase.fetch_signs.return_value = sample_sign_rows

        result = SignService.list_signs()

        mock_supabase.fetch_signs.assert_called_once_with()
        assert [r.id for r in result] == ["sign-3", "sign-2", "sign-1"]

    def test_list_signs_empty_table(self, mock_supabase):
        mock_supabase.fetch_signs.return_value = []
        assert SignService.list_signs() == []

    def test_list_failure_becomes_store_error(self, mock_supabase):
        mock_supabase.fetch_signs.side_effect = SupabaseClientError("connection refused")

        with pytest.raises(StoreError) as exc_info:
            SignService.list_signs()

        assert exc_info.value.message == "connection refused"
        assert exc_info.value.details["operation"] == "list"

    def test_malformed_row_becomes_store_error(self, mock_supabase):
        mock_supabase.fetch_signs.return_value = [{"sign_type": "Warning"}]
        with pytest.raises(StoreError):
            SignService.list_signs()

    def test_null_fields_load_as_empty(self, mock_supabase, sample_sign_rows):
        partial = {**sample_sign_rows[0], "sign_details": None, "legend_color": None, "photo": None}
        mock_supabase.fetch_signs.return_value = [partial, *sample_sign_rows[1:]]

        result = SignService.list_signs()

        assert [r.id for r in result] == ["sign-3", "sign-2", "sign-1"]
        assert result[0].sign_details == ""
        assert result[0].legend_color == ""
        assert result[0].photo == ""
        assert result[0].mutcd_code == "R1-1"
        assert SignCatalog.from_records(result).filter(SearchFilters(legend_color="white")) == [result[2]]


    def test_create_sign(self, mock_supabase, candidate, stored_row):
        mock_supabase.insert_sign.return_value = stored_row

        record = SignService.create_sign(candidate)

        mock_supabase.insert_sign.assert_called_once_with(candidate.model_dump())
        assert record.id == "sign-4"
        assert record.created_at is not None

    def test_create_failure_becomes_store_error(self, mock_supabase, candidate):
        mock_supabase.insert_sign.side_effect = SupabaseClientError("duplicate key")

        with pytest.raises(StoreError) as exc_info:
            SignService.create_sign(candidate)

        assert exc_info.value.details["operation"] == "insert"


# =============================================================================
# CatalogService Tests
# =============================================================================

class TestCatalogService:
    """Catalog state: loaded once, prepended on insert."""

    def test_load(self, mock_supabase, sample_sign_rows):
        mock_supabase.fetch_signs.return_value = sample_sign_rows
        service = CatalogService()

        service.load()

        assert len(service.catalog) == 3
        assert service.error is None
        assert service.loaded

    def test_load_failure_is_recorded(self, mock_supabase):
        mock_supabase.fetch_signs.side_effect = SupabaseClientError("network down")
        service = CatalogService()

        service.load()

        assert service.error == "network down"
        assert not service.loading
        with pytest.raises(CatalogUnavailableError):
            service.snapshot()

    def test_refresh_clears_previous_error(self, mock_supabase, sample_sign_rows):
        mock_supabase.fetch_signs.side_effect = SupabaseClientError("network down")
        service = CatalogService()
        service.load()

        mock_supabase.fetch_signs.side_effect = None
        mock_supabase.fetch_signs.return_value = sample_sign_rows
        service.refresh()

        assert service.error is None
        assert len(service.snapshot()) == 3

    def test_add_prepends_without_refetch(self, mock_supabase, sample_sign_rows, candidate, stored_row):
        mock_supabase.fetch_signs.return_value = sample_sign_rows
        mock_supabase.insert_sign.return_value = stored_row
        service = CatalogService()
        service.load()
        before = service.catalog

        record = service.add(candidate)

        assert len(service.catalog) == len(before) + 1
        assert service.catalog.records[0] == record
        assert service.catalog is not before
        assert mock_supabase.fetch_signs.call_count == 1

    def test_failed_add_leaves_catalog_unchanged(self, mock_supabase, sample_sign_rows, candidate):
        mock_supabase.fetch_signs.return_value = sample_sign_rows
        mock_supabase.insert_sign.side_effect = SupabaseClientError("timeout")
        service = CatalogService()
        service.load()
        before = service.catalog

        with pytest.raises(StoreError):
            service.add(candidate)

        assert service.catalog is before

    def test_add_during_load_is_kept(self, mock_supabase, sample_sign_rows, candidate, stored_row):
        fetch_started = threading.Event()
        release_fetch = threading.Event()

        def slow_fetch():
            fetch_started.set()
            release_fetch.wait(timeout=5)
            return sample_sign_rows

        mock_supabase.fetch_signs.side_effect = slow_fetch
        mock_supabase.insert_sign.return_value = stored_row
        service = CatalogService()

        loader = threading.Thread(target=service.load)
        loader.start()
        assert fetch_started.wait(timeout=5)
        assert service.loading

        record = service.add(candidate)
        release_fetch.set()
        loader.join(timeout=5)

        assert not service.loading
        assert [r.id for r in service.catalog.records] == ["sign-4", "sign-3", "sign-2", "sign-1"]
        assert service.catalog.records[0] == record

    def test_add_during_load_is_not_duplicated(self, mock_supabase, sample_sign_rows, candidate, stored_row):
        release_fetch = threading.Event()

        def slow_fetch():
            release_fetch.wait(timeout=5)
            # The insert landed before the select ran
            return [stored_row, *sample_sign_rows]

        mock_supabase.fetch_signs.side_effect = slow_fetch
        mock_supabase.insert_sign.return_value = stored_row
        service = CatalogService()

        loader = threading.Thread(target=service.load)
        loader.start()
        service.add(candidate)
        release_fetch.set()
        loader.join(timeout=5)

        assert [r.id for r in service.catalog.records] == ["sign-4", "sign-3", "sign-2", "sign-1"]
