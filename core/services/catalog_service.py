# =============================================================================
# core/services/catalog_service.py - Displayed Catalog State
# =============================================================================
# Owns the catalog the search view reads from, plus its loading / error
# status. The catalog value is replaced, never mutated:
# - load(): fetch everything from the store (startup and manual refresh)
# - add(): insert one sign, then prepend it locally without a re-fetch
#
# Store calls run in worker threads, so a refresh and an upload can
# overlap. Replacements happen under a lock, and a sign added while a
# load is in flight is kept on top of the freshly loaded records.
#
# The local copy can still drift from the store if someone else writes to
# it; there is no conflict detection.
#
# Usage:
#   from core.services.catalog_service import catalog_service
#   catalog_service.load()
#   matches = catalog_service.catalog.filter(filters)
# =============================================================================

import logging
import threading

from app.exceptions import CatalogUnavailableError, StoreError
from core.catalog import SignCatalog
from core.models.sign import SignCreate, SignRecord
from core.services.sign_service import SignService

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Holds the current SignCatalog value.

    Only load and add completions replace the value, so readers always
    see a consistent snapshot.
    """

    def __init__(self, catalog: SignCatalog | None = None):
        self.catalog = catalog or SignCatalog()
        self.loading = False
        self.error: str | None = None
        self._lock = threading.Lock()
        # One list per in-flight load, collecting signs added meanwhile
        self._pending_loads: list[list[SignRecord]] = []

    @property
    def loaded(self) -> bool:
        return not self.loading and self.error is None

    def load(self) -> SignCatalog:
        """
        Replace the catalog with a fresh copy from the store.

        A store failure is recorded in `error` rather than raised, so the
        app keeps serving and can report it on the next read.
        """
        added_meanwhile: list[SignRecord] = []
        with self._lock:
            self.loading = True
            self._pending_loads.append(added_meanwhile)

        try:
            records = SignService.list_signs()
        except StoreError as e:
            with self._lock:
                self.error = e.message
                self._finish_load(added_meanwhile)
            logger.error(f"Error fetching signs: {e.message}")
            return self.catalog

        with self._lock:
            fetched_ids = {record.id for record in records}
            catalog = SignCatalog.from_records(records)
            for record in added_meanwhile:
                if record.id not in fetched_ids:
                    catalog = catalog.with_new_record(record)
            self.catalog = catalog
            self.error = None
            self._finish_load(added_meanwhile)

        logger.info(f"Loaded {len(self.catalog)} signs")
        return self.catalog

    def _finish_load(self, added_meanwhile: list[SignRecord]) -> None:
        self._pending_loads.remove(added_meanwhile)
        self.loading = bool(self._pending_loads)

    def refresh(self) -> SignCatalog:
        """Re-fetch from the store (explicit request only)."""
        return self.load()

    def snapshot(self) -> SignCatalog:
        """
        Current catalog for reading.

        Raises:
            CatalogUnavailableError: If the last load failed
        """
        if self.error is not None:
            raise CatalogUnavailableError(self.error)
        return self.catalog

    def add(self, candidate: SignCreate) -> SignRecord:
        """
        Insert a sign and prepend it to the catalog.

        The catalog is only replaced after the insert succeeds.

        Raises:
            StoreError: If the insert fails (catalog left unchanged)
        """
        record = SignService.create_sign(candidate)
        with self._lock:
            self.catalog = self.catalog.with_new_record(record)
            for added_meanwhile in self._pending_loads:
                added_meanwhile.append(record)
        return record


# Global singleton instance
catalog_service = CatalogService()
