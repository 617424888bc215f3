"""
Availability sheet layout.

    row 1                        Schedule | 06/06 - Corporate Prayer | 06/01 | ...
    rows 2..(1 + roles)          one row per role, filled in by hand
    blank rows
    availability_start_row - 1   Availability
    availability_start_row..     one row per role, written by refresh_matrix

Rows and columns are 1-based, as in the spreadsheet.
"""

from ministry_scheduler.config import SchedulerConfig
from ministry_scheduler.constants import AVAILABILITY_HEADER, SCHEDULE_HEADER
from ministry_scheduler.models import ServiceDate
from ministry_scheduler.validation.parsers import normalize_date_key


def build_matrix_grid(dates: list[ServiceDate], config: SchedulerConfig) -> list[list[str]]:
    """Return the full cell grid for a freshly set-up availability sheet."""
    width = len(dates) + 1
    blank = [""] * width
    grid = [[SCHEDULE_HEADER] + [date.header for date in dates]]
    grid.extend([role] + [""] * len(dates) for role in config.role_order)
    while len(grid) < config.availability_start_row - 2:
        grid.append(list(blank))
    grid.append([AVAILABILITY_HEADER] + [""] * len(dates))
    grid.extend([role] + [""] * len(dates) for role in config.role_order)
    return grid


def role_row(role: str, config: SchedulerConfig) -> int:
    """Sheet row of a role in the availability section."""
    try:
        offset = config.role_order.index(role.upper())
    except ValueError as exc:
        raise KeyError(f"unknown role: {role}") from exc
    return config.availability_start_row + offset


def date_columns(header_row: list[str]) -> dict[str, int]:
    """Map MM/dd keys to sheet columns by normalizing the header row (column 1 is the label)."""
    columns = {}
    for index, header in enumerate(header_row[1:], start=2):
        if not str(header).strip():
            continue
        columns.setdefault(normalize_date_key(header), index)
    return columns
