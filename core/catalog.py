# =============================================================================
# core/catalog.py - Immutable Sign Catalog
# =============================================================================
# The in-memory collection shown by the search view. A SignCatalog is a
# value: adding a sign produces a new catalog with the record prepended,
# the old one is left untouched.
# =============================================================================

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from core.models.sign import SearchFilters, SignRecord
from lib.sign_filter import filter_signs


@dataclass(frozen=True)
class SignCatalog:
    """Ordered, newest-first collection of signs."""

    records: tuple[SignRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_records(cls, records: Iterable[SignRecord]) -> SignCatalog:
        return cls(records=tuple(records))

    def __len__(self) -> int:
        return len(self.records)

    def with_new_record(self, record: SignRecord) -> SignCatalog:
        """Return a new catalog with `record` in front."""
        return SignCatalog(records=(record, *self.records))

    def filter(self, filters: SearchFilters | None = None) -> list[SignRecord]:
        return filter_signs(self.records, filters)

    def get(self, sign_id: str) -> SignRecord | None:
        for record in self.records:
            if record.id == sign_id:
                return record
        return None
