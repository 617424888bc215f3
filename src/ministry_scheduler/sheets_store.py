"""Google Sheets backed store (gspread + service-account credentials)."""

import json
import logging
import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
import gspread
from gspread.exceptions import GSpreadException, WorksheetNotFound
from gspread.utils import rowcol_to_a1
from google.oauth2.service_account import Credentials
from ministry_scheduler import layout
from ministry_scheduler.config import SchedulerConfig
from ministry_scheduler.errors import MissingResourceError, StoreError
from ministry_scheduler.models import RosterRow
from ministry_scheduler.store import TabularStore
from ministry_scheduler.validation.converters import validate_roster

CREDENTIALS_ENV_VAR = "GOOGLE_SERVICE_ACCOUNT_JSON"
SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]
NO_WRAP_FORMAT = {"wrapStrategy": "OVERFLOW_CELL"}
BOLD_FORMAT = {"textFormat": {"bold": True}}


def client_from_env() -> gspread.Client:
    """Authorise a gspread client from the service-account JSON in the environment."""
    creds_json = os.getenv(CREDENTIALS_ENV_VAR)
    if not creds_json:
        raise StoreError(
            f"environment variable {CREDENTIALS_ENV_VAR} is not set; "
            "set it to the JSON key of a service account"
        )
    try:
        info = json.loads(creds_json)
    except json.JSONDecodeError as exc:
        raise StoreError("invalid service account JSON payload") from exc

    creds = Credentials.from_service_account_info(info, scopes=SCOPES)
    logging.debug("Google Sheets client initialised")
    return gspread.authorize(creds)


def open_spreadsheet(config: SchedulerConfig, client: gspread.Client | None = None):
    if not config.spreadsheet_id:
        raise StoreError("spreadsheet_id is not configured")
    client = client or client_from_env()
    with _wrap_api_errors(f"opening spreadsheet {config.spreadsheet_id}"):
        return client.open_by_key(config.spreadsheet_id)


@contextmanager
def _wrap_api_errors(action: str):
    try:
        yield
    except WorksheetNotFound as exc:
        raise MissingResourceError(str(exc) or action) from exc
    except GSpreadException as exc:
        raise StoreError(f"{action} failed: {exc}") from exc


def _column_letter(column: int) -> str:
    return rowcol_to_a1(1, column).rstrip("0123456789")


class GoogleSheetsStore(TabularStore):
    """Store backed by worksheets of a single spreadsheet."""

    def __init__(self, spreadsheet, config: SchedulerConfig, matrix_name: str | None = None):
        super().__init__(config, matrix_name)
        self.spreadsheet = spreadsheet
        self._matrix_header = None

    def with_matrix(self, name: str) -> "GoogleSheetsStore":
        bound = super().with_matrix(name)
        bound._matrix_header = None
        return bound

    def _worksheet(self, name: str):
        with _wrap_api_errors(f"opening worksheet {name}"):
            return self.spreadsheet.worksheet(name)

    def _roster_sheet(self):
        return self._worksheet(self.config.roster_sheet_name)

    def _matrix_sheet(self):
        if not self.matrix_name:
            raise MissingResourceError("availability matrix (no matrix name given)")
        return self._worksheet(self.matrix_name)

    def read_roster(self) -> list[RosterRow]:
        ws = self._roster_sheet()
        with _wrap_api_errors(f"reading {ws.title}"):
            records = ws.get_all_records()
        return validate_roster(records, self.config.roster_columns)

    def upsert_roster_row(self, row: RosterRow) -> None:
        ws = self._roster_sheet()
        with _wrap_api_errors(f"updating {ws.title}"):
            values = ws.get_all_values()
            header = values[0] if values else list(self.config.roster_columns.values())
            cells = row.to_csv(self.config.roster_columns)
            if self.config.roster_name_header not in header:
                raise MissingResourceError(
                    f"{self.config.roster_name_header} column in {ws.title}"
                )
            name_col = header.index(self.config.roster_name_header)

            for row_number, existing in enumerate(values[1:], start=2):
                if len(existing) > name_col and existing[name_col].strip() == row.name:
                    updated = list(existing) + [""] * (len(header) - len(existing))
                    for index, title in enumerate(header):
                        if title in cells:
                            updated[index] = cells[title]
                    ws.update(range_name=f"A{row_number}", values=[updated])
                    logging.debug(f"Updated roster row {row_number} for {row.name}")
                    return

            ws.append_row([cells.get(title, "") for title in header], value_input_option="RAW")
            logging.debug(f"Appended roster row for {row.name}")

    def _date_columns(self, ws) -> dict[str, int]:
        if self._matrix_header is None:
            self._matrix_header = ws.row_values(1)
        return layout.date_columns(self._matrix_header)

    def write_matrix_cell(self, role: str, date_key: str, value: str) -> None:
        ws = self._matrix_sheet()
        with _wrap_api_errors(f"writing {ws.title}"):
            column = self._date_columns(ws).get(date_key)
            if column is None:
                logging.warning(f"No column for {date_key} in {ws.title}")
                return
            ws.update_cell(layout.role_row(role, self.config), column, value)

    def write_matrix_cells(self, cells: Iterable[tuple[str, str, str]]) -> None:
        """Write all cells in a single batch_update request."""
        ws = self._matrix_sheet()
        with _wrap_api_errors(f"writing {ws.title}"):
            columns = self._date_columns(ws)
            data = []
            for role, date_key, value in cells:
                column = columns.get(date_key)
                if column is None:
                    logging.warning(f"No column for {date_key} in {ws.title}")
                    continue
                cell = rowcol_to_a1(layout.role_row(role, self.config), column)
                data.append({"range": cell, "values": [[value]]})
            if data:
                ws.batch_update(data)
            logging.debug(f"Wrote {len(data)} availability cell(s) to {ws.title}")

    def clear_matrix_region(self, roles: Iterable[str], date_keys: Iterable[str]) -> None:
        ws = self._matrix_sheet()
        # the header may have changed since the last refresh
        self._matrix_header = None
        with _wrap_api_errors(f"clearing {ws.title}"):
            columns = self._date_columns(ws)
            cols = [columns[key] for key in date_keys if key in columns]
            rows = [layout.role_row(role, self.config) for role in roles]
            if not cols or not rows:
                return
            region = f"{rowcol_to_a1(min(rows), min(cols))}:{rowcol_to_a1(max(rows), max(cols))}"
            ws.batch_clear([region])
            ws.format(region, NO_WRAP_FORMAT)

    def create_matrix(self, name: str, grid: list[list[str]]) -> None:
        width = max(len(row) for row in grid)
        with _wrap_api_errors(f"creating {name}"):
            try:
                ws = self.spreadsheet.worksheet(name)
                ws.clear()
            except WorksheetNotFound:
                ws = self.spreadsheet.add_worksheet(title=name, rows=len(grid), cols=width)
            ws.update(range_name="A1", values=grid)
            label_row = self.config.availability_start_row - 1
            ws.format(f"1:{1 + len(self.config.role_order)}", BOLD_FORMAT)
            ws.format(f"{label_row}:{label_row}", BOLD_FORMAT)
        logging.info(f"Set up availability sheet: {name}")

    def delete_matrix(self, name: str) -> bool:
        with _wrap_api_errors(f"deleting {name}"):
            try:
                ws = self.spreadsheet.worksheet(name)
            except WorksheetNotFound:
                return False
            self.spreadsheet.del_worksheet(ws)
        return True

    def clear_roster_fields(self, fields: Iterable[str]) -> None:
        ws = self._roster_sheet()
        with _wrap_api_errors(f"clearing {ws.title}"):
            header = ws.row_values(1)
            ranges = []
            for field in fields:
                title = self.config.roster_columns[field]
                if title not in header:
                    logging.warning(f"{title} column not found.")
                    continue
                letter = _column_letter(header.index(title) + 1)
                ranges.append(f"{letter}2:{letter}")
            if ranges:
                ws.batch_clear(ranges)

    def _response_sheets(self) -> list:
        prefix = self.config.form_responses_prefix
        with _wrap_api_errors("listing worksheets"):
            return [ws for ws in self.spreadsheet.worksheets() if ws.title.startswith(prefix)]

    def form_response_records(self) -> Iterator[dict]:
        sheets = self._response_sheets()
        if not sheets:
            raise MissingResourceError(f"{self.config.form_responses_prefix}* worksheet")
        with _wrap_api_errors(f"reading {sheets[0].title}"):
            records = sheets[0].get_all_records()
        yield from records

    def delete_response_tabs(self) -> list[str]:
        deleted = []
        for ws in self._response_sheets():
            with _wrap_api_errors(f"deleting {ws.title}"):
                self.spreadsheet.del_worksheet(ws)
            deleted.append(ws.title)
        return deleted
