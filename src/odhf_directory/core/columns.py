"""Column alias resolution.

ODHF revisions have shipped the same fields under different headers
("Province or Territory", "province", ...). Each logical field gets an
ordered list of accepted headers and the first match wins.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .models import ResolvedColumns

PROVINCE = "province"
FACILITY_TYPE = "odhf_facility_type"

ALIASES: dict[str, tuple[str, ...]] = {
    PROVINCE: (
        "province",
        "Province",
        "Province or Territory",
        "Province/Territory",
        "prov",
        "province_or_territory",
    ),
    FACILITY_TYPE: (
        "odhf_facility_type",
        "ODHF Facility Type",
        "Facility Type",
        "facility_type",
        "odhf facility type",
    ),
}


class ColumnResolutionError(ValueError):
    """A required logical column has no matching header in the dataset."""

    def __init__(self, have: Sequence[str], need_any_of: dict[str, list[str]]):
        super().__init__("Expected columns not found.")
        self.have = list(have)
        self.need_any_of = need_any_of

    def to_dict(self) -> dict:
        return {"error": str(self), "have": self.have, "need_any_of": self.need_any_of}


def resolve_column(columns: Sequence[str], aliases: Iterable[str]) -> Optional[str]:
    """Return the actual column name matching the aliases, or None.

    Exact matches win over case-insensitive ones: every alias is tried
    verbatim first, and only then is each alias compared ignoring case.
    """
    aliases = tuple(aliases)
    for alias in aliases:
        if alias in columns:
            return alias

    lowered: dict[str, str] = {}
    for col in columns:
        lowered.setdefault(col.lower(), col)
    for alias in aliases:
        match = lowered.get(alias.lower())
        if match is not None:
            return match
    return None


def resolve_required(columns: Sequence[str]) -> ResolvedColumns:
    """Resolve both search fields or raise ColumnResolutionError."""
    province = resolve_column(columns, ALIASES[PROVINCE])
    facility_type = resolve_column(columns, ALIASES[FACILITY_TYPE])
    if province is None or facility_type is None:
        raise ColumnResolutionError(
            have=columns,
            need_any_of={field: list(names) for field, names in ALIASES.items()},
        )
    return ResolvedColumns(province=province, facility_type=facility_type)
