from __future__ import annotations

import pytest

from odhf_directory.core.columns import (
    ALIASES,
    FACILITY_TYPE,
    PROVINCE,
    ColumnResolutionError,
    resolve_column,
    resolve_required,
)


def test_resolves_odhf_v1_headers():
    resolved = resolve_required(["Province or Territory", "ODHF Facility Type"])
    assert resolved.province == "Province or Territory"
    assert resolved.facility_type == "ODHF Facility Type"


def test_exact_match_preferred_over_case_insensitive():
    assert resolve_column(["PROVINCE", "province"], ALIASES[PROVINCE]) == "province"
    assert resolve_column(["PROVINCE"], ALIASES[PROVINCE]) == "PROVINCE"


def test_case_insensitive_match_returns_actual_header():
    assert resolve_column(["city", "FACILITY TYPE"], ALIASES[FACILITY_TYPE]) == "FACILITY TYPE"


def test_alias_order_decides_between_candidates():
    columns = ["Facility Type", "odhf_facility_type"]
    assert resolve_column(columns, ALIASES[FACILITY_TYPE]) == "odhf_facility_type"


def test_no_match_returns_none():
    assert resolve_column(["Facility Name", "City"], ALIASES[PROVINCE]) is None
    assert resolve_column([], ALIASES[PROVINCE]) is None


def test_missing_logical_column_reports_diagnostics():
    columns = ["Facility Name", "Province"]
    with pytest.raises(ColumnResolutionError) as excinfo:
        resolve_required(columns)

    body = excinfo.value.to_dict()
    assert body["error"] == "Expected columns not found."
    assert body["have"] == columns
    assert body["need_any_of"] == {
        "province": list(ALIASES[PROVINCE]),
        "odhf_facility_type": list(ALIASES[FACILITY_TYPE]),
    }


def test_exact_match_on_any_alias_beats_case_insensitive_match():
    columns = ["PROVINCE", "Province or Territory"]
    assert resolve_column(columns, ALIASES[PROVINCE]) == "Province or Territory"

    columns = ["FACILITY_TYPE", "Facility Type"]
    assert resolve_column(columns, ALIASES[FACILITY_TYPE]) == "Facility Type"
