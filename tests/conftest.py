from __future__ import annotations

import csv
from pathlib import Path

import pytest
from sse_starlette.sse import AppStatus
from starlette.testclient import TestClient

from odhf_directory import server
from odhf_directory.core.dataset import DatasetStore
from odhf_directory.server import create_app


@pytest.fixture(autouse=True)
def restore_server_state():
    original = server.store
    # The exit event is bound to the loop that first awaited it; each test runs its own loop.
    AppStatus.should_exit_event = None
    yield
    server.store = original
    AppStatus.should_exit_event = None


ODHF_HEADER = [
    "Index",
    "Facility Name",
    "Source Facility Type",
    "ODHF Facility Type",
    "Street No",
    "Street Name",
    "Postal Code",
    "City",
    "Province or Territory",
    "Latitude",
    "Longitude",
]


def odhf_row(name: str, city: str, province: str, facility_type: str, **extra) -> dict:
    row = {col: "" for col in ODHF_HEADER}
    row.update({
        "Index": extra.pop("index", "1"),
        "Facility Name": name,
        "City": city,
        "Province or Territory": province,
        "ODHF Facility Type": facility_type,
        "Postal Code": extra.pop("postal_code", "H3A 0G4"),
        "Latitude": extra.pop("latitude", "45.5"),
        "Longitude": extra.pop("longitude", "-73.57"),
    })
    row.update(extra)
    return row


def write_csv(path: Path, header: list[str], rows: list[dict], bom: bool = False) -> Path:
    with open(path, "w", encoding="utf-8-sig" if bom else "utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=header)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path


@pytest.fixture
def sample_rows() -> list[dict]:
    return [
        odhf_row("Montreal General Hospital", "Montreal", "Quebec", "Hospitals", index="1"),
        odhf_row("CLSC Cote-des-Neiges", "Montreal", "Quebec", "Ambulatory health care services", index="2"),
        odhf_row("Toronto General Hospital", "Toronto", "Ontario", "Hospitals", index="3"),
        odhf_row("Vancouver Nursing Home", "Vancouver", "British Columbia", "Nursing and residential care facilities", index="4"),
    ]


@pytest.fixture
def sample_csv(tmp_path, sample_rows) -> Path:
    return write_csv(tmp_path / "odhf_v1.1.csv", ODHF_HEADER, sample_rows)


@pytest.fixture
def sample_store(sample_csv) -> DatasetStore:
    return DatasetStore(sample_csv)


@pytest.fixture
def client(sample_store):
    return TestClient(create_app(sample_store))
