"""Lazy CSV dataset loading.

The facility directory is a single CSV file read into memory on first use
and kept for the lifetime of the store. A missing, unreadable or empty file
leaves the dataset absent; callers turn that into a client-facing error.
"""

from __future__ import annotations

import csv
import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .models import Record

logger = logging.getLogger(__name__)

DEFAULT_CSV_NAME = "odhf_v1.1.csv"


def get_csv_path() -> Path:
    """Get the dataset path, bundled next to the package unless ODHF_CSV_PATH is set."""
    default = Path(__file__).resolve().parent.parent / DEFAULT_CSV_NAME
    return Path(os.environ.get("ODHF_CSV_PATH", str(default)))


class DatasetUnavailableError(ValueError):
    """The CSV file is missing, unreadable or has no data rows."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"CSV not found or empty at {path}")
        self.path = str(path)


@dataclass(frozen=True)
class Dataset:
    """Loaded rows plus the header order they were read with."""

    columns: tuple[str, ...]
    records: tuple[Record, ...]

    def __len__(self) -> int:
        return len(self.records)


def load_dataset(path: Union[str, Path]) -> Optional[Dataset]:
    """Parse the CSV at path. Returns None when there is nothing usable to load."""
    try:
        with open(path, encoding="utf-8-sig", newline="") as f:
            # Fully empty lines parse as [] and are skipped, including before the header.
            rows = (row for row in csv.reader(f) if row)
            columns = tuple(next(rows, ()))
            # Cells past the header width are dropped, missing ones become None.
            records = tuple(
                {col: row[i] if i < len(row) else None for i, col in enumerate(columns)}
                for row in rows
            )
    except FileNotFoundError:
        logger.warning("Dataset file not found: %s", path)
        return None
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        logger.warning("Could not read dataset %s: %s", path, exc)
        return None

    if not records:
        logger.warning("Dataset %s has no data rows", path)
        return None

    logger.info("Loaded %d rows with %d columns from %s", len(records), len(columns), path)
    return Dataset(columns=columns, records=records)


class DatasetStore:
    """Holds the dataset for one CSV path, parsing it on first access only."""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path is not None else get_csv_path()
        self._dataset: Optional[Dataset] = None
        self._lock = threading.Lock()
        self.load_count = 0

    def ensure_loaded(self) -> Optional[Dataset]:
        """Return the cached dataset, loading it if this is the first call.

        An absent result is not cached so the next call looks for the file again.
        """
        if self._dataset is not None:
            return self._dataset
        with self._lock:
            if self._dataset is None:
                self.load_count += 1
                self._dataset = load_dataset(self.path)
            return self._dataset

    def require(self) -> Dataset:
        dataset = self.ensure_loaded()
        if dataset is None:
            raise DatasetUnavailableError(self.path)
        return dataset
