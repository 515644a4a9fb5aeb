"""
View projection over an in-memory collection.

A projection is a derived, read-only sequence: the collection is filtered
(every predicate AND-ed) and then sorted on a single field. The source
collection is never mutated and nothing is cached; callers re-project
whenever the collection, the filters or the sort change.

Filter semantics:
- text fields match by case-insensitive substring; an empty needle matches everything
- exact fields match by equality unless the value is the ``"all"`` sentinel

Sorting is stable, so records with equal keys keep their filtered order in
both directions.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, TypeVar

from ..errors import UnsupportedFieldError
from ..schemas.projection import ALL_SENTINEL, SortSpec

T = TypeVar("T")


def _field_value(record: Any, field: str) -> Any:
    value = getattr(record, field)
    if isinstance(value, Enum):
        return value.value
    return value


def matches(
    record: Any,
    filters: Mapping[str, str],
    exact_fields: frozenset[str] = frozenset(),
) -> bool:
    for field, needle in filters.items():
        value = _field_value(record, field)
        if field in exact_fields:
            if needle != ALL_SENTINEL and value != needle:
                return False
        elif needle.lower() not in str(value).lower():
            return False
    return True


def project(
    collection: Iterable[T],
    filters: Mapping[str, str] | None = None,
    sort: SortSpec | None = None,
    *,
    exact_fields: frozenset[str] = frozenset(),
) -> list[T]:
    """Filter then sort ``collection`` into a new list.

    Args:
        collection: Source records, read only
        filters: Field name to filter value; ``None`` or empty keeps everything
        sort: Single-field sort; ``None`` keeps collection order
        exact_fields: Fields compared by equality with the ``"all"`` sentinel
            instead of substring matching

    Returns:
        list: The projected records
    """
    active_filters = filters or {}
    projected = [
        record for record in collection if matches(record, active_filters, exact_fields)
    ]
    if sort is None:
        return projected
    # sorted() is stable for reverse=True as well
    return sorted(
        projected,
        key=lambda record: _field_value(record, sort.field),
        reverse=sort.descending,
    )


def validate_fields(
    filters: Mapping[str, str] | None,
    sort: SortSpec | None,
    *,
    filterable: frozenset[str],
    sortable: frozenset[str],
) -> None:
    """Reject filter or sort fields the resource does not expose.

    Raises:
        UnsupportedFieldError: If a filter or sort field is not allowed
    """
    unknown = set(filters or {}) - filterable
    if unknown:
        raise UnsupportedFieldError(
            f"Unsupported filter fields: {', '.join(sorted(unknown))}", unknown
        )
    if sort is not None and sort.field not in sortable:
        raise UnsupportedFieldError(
            f"Unsupported sort field '{sort.field}'. "
            f"Must be one of: {', '.join(sorted(sortable))}",
            [sort.field],
        )
