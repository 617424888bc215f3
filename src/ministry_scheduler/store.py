"""
Roster and availability-matrix stores.

A store owns the roster table and one month's availability sheet. The CSV
store keeps each sheet as a CSV file in a data folder; the Google Sheets
store (sheets_store.py) keeps them as worksheets of one spreadsheet.
"""

import copy
import csv
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from pydantic import ValidationError
from ministry_scheduler import file_io, layout
from ministry_scheduler.config import SchedulerConfig
from ministry_scheduler.errors import MissingResourceError, StoreError
from ministry_scheduler.models import FormResponse, RosterRow
from ministry_scheduler.validation.converters import validate_form_response, validate_roster


class TabularStore(ABC):
    """Roster table plus the availability sheet named by matrix_name."""

    def __init__(self, config: SchedulerConfig, matrix_name: str | None = None):
        self.config = config
        self.matrix_name = matrix_name

    @abstractmethod
    def read_roster(self) -> list[RosterRow]:
        """All roster rows in sheet order."""

    @abstractmethod
    def upsert_roster_row(self, row: RosterRow) -> None:
        """Replace the row whose name matches row.name, or append it."""

    @abstractmethod
    def write_matrix_cell(self, role: str, date_key: str, value: str) -> None:
        """Write one availability cell of the bound matrix."""

    def write_matrix_cells(self, cells: Iterable[tuple[str, str, str]]) -> None:
        """Write several (role, date_key, value) cells of the bound matrix."""
        for role, date_key, value in cells:
            self.write_matrix_cell(role, date_key, value)

    @abstractmethod
    def clear_matrix_region(self, roles: Iterable[str], date_keys: Iterable[str]) -> None:
        """Blank the availability cells for roles x date_keys."""

    @abstractmethod
    def create_matrix(self, name: str, grid: list[list[str]]) -> None:
        """Create (or reset) a matrix sheet with the given cells."""

    @abstractmethod
    def delete_matrix(self, name: str) -> bool:
        """Delete a matrix sheet; False if it did not exist."""

    @abstractmethod
    def clear_roster_fields(self, fields: Iterable[str]) -> None:
        """Blank the given roster fields for every member."""

    @abstractmethod
    def form_response_records(self) -> Iterator[dict]:
        """Raw form submissions keyed by question title."""

    @abstractmethod
    def delete_response_tabs(self) -> list[str]:
        """Remove form-response sheets; returns their names."""

    def with_matrix(self, name: str) -> "TabularStore":
        """A view of this store bound to another availability sheet."""
        bound = copy.copy(self)
        bound.matrix_name = name
        return bound

    def roster_names(self) -> list[str]:
        """Member names for the form's name dropdown."""
        return [row.name for row in self.read_roster() if row.name]

    def form_responses(self) -> Iterator[FormResponse]:
        return iter_form_responses(self.form_response_records(), self.config)


def iter_form_responses(
    records: Iterable[dict], config: SchedulerConfig
) -> Iterator[FormResponse]:
    """Validate raw form records lazily; invalid records are logged and skipped."""
    for index, record in enumerate(records, start=1):
        try:
            yield validate_form_response(record, config.form_questions)
        except ValidationError as exc:
            logging.warning(f"Skipping form response {index}: {exc.errors()[0]['msg']}")


@contextmanager
def _wrap_io_errors(action: str):
    try:
        yield
    except (OSError, ValueError, csv.Error) as exc:
        raise StoreError(f"{action} failed: {exc}") from exc


class CsvStore(TabularStore):
    """Store backed by CSV files in a data folder, one file per sheet."""

    def __init__(
        self, data_folder, config: SchedulerConfig, matrix_name: str | None = None
    ):
        super().__init__(config, matrix_name)
        self.data_folder = Path(data_folder)
        self._lock = threading.Lock()

    @property
    def roster_path(self) -> Path:
        return self.data_folder / f"{self.config.roster_sheet_name}.csv"

    def sheet_path(self, name: str) -> Path:
        return self.data_folder / f"{name}.csv"

    def _require(self, path: Path) -> Path:
        if not path.exists():
            raise MissingResourceError(str(path))
        return path

    def _load_roster_records(self) -> tuple[list[dict], list[str]]:
        path = self._require(self.roster_path)
        with _wrap_io_errors(f"reading {path}"):
            records = file_io.load_csv(path)
        fieldnames = list(records[0].keys()) if records else []
        for header in self.config.roster_columns.values():
            if header not in fieldnames:
                fieldnames.append(header)
        return records, fieldnames

    def read_roster(self) -> list[RosterRow]:
        records, _ = self._load_roster_records()
        return validate_roster(records, self.config.roster_columns)

    def upsert_roster_row(self, row: RosterRow) -> None:
        name_header = self.config.roster_name_header
        with self._lock:
            records, fieldnames = self._load_roster_records()
            values = row.to_csv(self.config.roster_columns)
            for record in records:
                if record.get(name_header, "") == row.name:
                    record.update(values)
                    logging.debug(f"Updated roster row for {row.name}")
                    break
            else:
                records.append(values)
                logging.debug(f"Appended roster row for {row.name}")
            with _wrap_io_errors(f"writing {self.roster_path}"):
                file_io.save_csv(records, fieldnames, self.roster_path)

    def _matrix_path(self) -> Path:
        if not self.matrix_name:
            raise MissingResourceError("availability matrix (no matrix name given)")
        return self._require(self.sheet_path(self.matrix_name))

    def _edit_matrix(self, cells: list[tuple[str, str, str]]) -> None:
        path = self._matrix_path()
        with _wrap_io_errors(f"updating {path}"):
            grid = file_io.load_grid(path)
            columns = layout.date_columns(grid[0] if grid else [])
            for role, date_key, value in cells:
                column = columns.get(date_key)
                if column is None:
                    logging.warning(f"No column for {date_key} in {path.name}")
                    continue
                row = layout.role_row(role, self.config)
                while len(grid) < row:
                    grid.append([])
                cells_row = grid[row - 1]
                while len(cells_row) < column:
                    cells_row.append("")
                cells_row[column - 1] = value
            file_io.save_grid(grid, path)

    def write_matrix_cell(self, role: str, date_key: str, value: str) -> None:
        self._edit_matrix([(role, date_key, value)])

    def write_matrix_cells(self, cells: Iterable[tuple[str, str, str]]) -> None:
        self._edit_matrix(list(cells))

    def clear_matrix_region(self, roles: Iterable[str], date_keys: Iterable[str]) -> None:
        date_keys = list(date_keys)
        self._edit_matrix([(role, key, "") for role in roles for key in date_keys])

    def create_matrix(self, name: str, grid: list[list[str]]) -> None:
        path = self.sheet_path(name)
        with _wrap_io_errors(f"writing {path}"):
            path.parent.mkdir(parents=True, exist_ok=True)
            file_io.save_grid(grid, path)

    def delete_matrix(self, name: str) -> bool:
        path = self.sheet_path(name)
        if not path.exists():
            return False
        with _wrap_io_errors(f"deleting {path}"):
            path.unlink()
        return True

    def clear_roster_fields(self, fields: Iterable[str]) -> None:
        headers = [self.config.roster_columns[field] for field in fields]
        with self._lock:
            records, fieldnames = self._load_roster_records()
            for record in records:
                for header in headers:
                    record[header] = ""
            with _wrap_io_errors(f"writing {self.roster_path}"):
                file_io.save_csv(records, fieldnames, self.roster_path)

    def response_paths(self) -> list[Path]:
        prefix = self.config.form_responses_prefix
        return sorted(
            path for path in self.data_folder.glob("*.csv") if path.name.startswith(prefix)
        )

    def form_response_records(self) -> Iterator[dict]:
        paths = self.response_paths()
        if not paths:
            raise MissingResourceError(
                f"{self.data_folder}/{self.config.form_responses_prefix}*.csv"
            )
        with _wrap_io_errors(f"reading {paths[0]}"):
            records = file_io.load_csv(paths[0])
        yield from records

    def delete_response_tabs(self) -> list[str]:
        deleted = []
        for path in self.response_paths():
            with _wrap_io_errors(f"deleting {path}"):
                path.unlink()
            deleted.append(path.stem)
        return deleted
