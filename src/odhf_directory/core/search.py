"""Column listing and facility search over the in-memory dataset."""

from __future__ import annotations

from typing import Optional, Union

from .columns import resolve_required
from .dataset import Dataset
from .models import Record, SearchMessage

MAX_RESULTS = 25

NO_RESULTS_MESSAGE = "No results. Try another province (e.g., 'QC'/'Quebec') or facility_type."

# Sentinels some ODHF exports write for blank numeric cells. Matching is exact.
NULL_SENTINELS = frozenset({"", "NaN", "nan"})


def list_columns(dataset: Dataset) -> list[str]:
    return list(dataset.columns)


def normalize_value(value: Optional[str]) -> Optional[str]:
    """Map empty and NaN-like cells to None, pass everything else through."""
    if value is None or value in NULL_SENTINELS:
        return None
    return value


def _clean_filter(value: Optional[str]) -> str:
    return (value or "").strip()


def _contains(record: Record, column: str, needle: str) -> bool:
    return needle in (record.get(column) or "").lower()


def output_columns(dataset: Dataset, province_col: str, type_col: str) -> list[str]:
    """Pick the columns to return for each match, in display order.

    Falls back to every column when the dataset has none of the preferred ones.
    """
    preferred = [
        "Facility Name",
        "City",
        province_col,
        type_col,
        "Postal Code",
        "Latitude",
        "Longitude",
    ]
    selected: list[str] = []
    for col in preferred:
        if col in dataset.columns and col not in selected:
            selected.append(col)
    return selected or list(dataset.columns)


def search_facilities(
    dataset: Dataset,
    province: Optional[str] = None,
    facility_type: Optional[str] = None,
    limit: int = MAX_RESULTS,
) -> Union[list[Record], SearchMessage]:
    """Filter facilities by province and/or facility type.

    Both filters are case-insensitive substring matches and combine with AND.
    Blank filters are ignored. Raises ColumnResolutionError when the dataset
    has no recognisable province or facility type column.

    Returns at most ``limit`` projected rows in file order, or a SearchMessage
    when nothing matches.
    """
    resolved = resolve_required(dataset.columns)

    filters = []
    province = _clean_filter(province)
    if province:
        filters.append((resolved.province, province.lower()))
    facility_type = _clean_filter(facility_type)
    if facility_type:
        filters.append((resolved.facility_type, facility_type.lower()))

    matches = [r for r in dataset.records if all(_contains(r, col, needle) for col, needle in filters)]
    if not matches:
        return SearchMessage(message=NO_RESULTS_MESSAGE)

    columns = output_columns(dataset, resolved.province, resolved.facility_type)
    return [{col: normalize_value(r.get(col)) for col in columns} for r in matches[:limit]]
