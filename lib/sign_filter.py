# =============================================================================
# lib/sign_filter.py - Catalog Search Filtering
# =============================================================================
# Narrows a collection of signs to those matching every active per-field
# substring predicate. Matching is case-insensitive and pure; the result
# keeps input order.
#
# Usage:
#   from lib.sign_filter import filter_signs
#   warnings = filter_signs(records, {"sign_type": "warn"})
# =============================================================================

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

Record = TypeVar("Record")


def _field_value(record: Any, field: str) -> str:
    """Read a field from a model or mapping; missing or None reads as ""."""
    if isinstance(record, Mapping):
        value = record.get(field)
    else:
        value = getattr(record, field, None)
    return "" if value is None else str(value)


def _active_filters(filters: BaseModel | Mapping[str, Any] | None) -> dict[str, str]:
    if filters is None:
        return {}
    if isinstance(filters, BaseModel):
        filters = filters.model_dump()
    return {field: str(value) for field, value in filters.items() if value}


def matches(record: Any, filters: BaseModel | Mapping[str, Any] | None) -> bool:
    """
    Check one record against a filter set.

    True when, for every filter with a non-empty value, the lowercased value
    is a substring of the lowercased record field.
    """
    return all(
        value.lower() in _field_value(record, field).lower()
        for field, value in _active_filters(filters).items()
    )


def filter_signs(
    records: Iterable[Record],
    filters: BaseModel | Mapping[str, Any] | None,
) -> list[Record]:
    """
    Return the records matching every active filter, in input order.

    Args:
        records: SignRecord models or row dicts
        filters: SearchFilters model or a field -> substring mapping

    Returns:
        New list; the full input when no filter has a value
    """
    active = _active_filters(filters)
    if not active:
        return list(records)
    return [record for record in records if matches(record, active)]
