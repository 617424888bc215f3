import datetime
import logging
from ministry_scheduler.config import SchedulerConfig
from ministry_scheduler.errors import MissingResourceError
from ministry_scheduler.models import AvailabilityMatrix, RosterRow, ServiceDate
from ministry_scheduler.service_dates import plan_month, service_dates
from ministry_scheduler.store import TabularStore
from ministry_scheduler.utils import format_display_name
from ministry_scheduler.validation.parsers import normalize_date_key


def fold_availability(roster: list[RosterRow], dates: list[ServiceDate]) -> AvailabilityMatrix:
    """
    Build the role -> date -> names mapping for a month.

    Rows without a name or roles are skipped. A member with a blank "times
    willing to serve" is listed nowhere; otherwise they are listed for every
    date not among their unavailable dates. Names keep roster order.
    """
    date_keys = [normalize_date_key(date.header) for date in dates]
    availability = {}

    for row in roster:
        if not row.name or not row.roles:
            continue

        display_name = format_display_name(row.name)
        unavailable = set(row.unavailable_dates)

        for role in row.roles:
            role_cells = availability.setdefault(role.upper(), {})
            for key in date_keys:
                names = role_cells.setdefault(key, [])
                if row.unavailable_all_month or key in unavailable:
                    continue
                names.append(display_name)

    return AvailabilityMatrix.from_dict(availability)


def render_matrix(
    matrix: AvailabilityMatrix, dates: list[ServiceDate], role_order
) -> list[list[str]]:
    """One row of cell values per role in role_order, one cell per service date."""
    date_keys = [normalize_date_key(date.header) for date in dates]
    return [
        ["\n".join(matrix.names(role, key)) for key in date_keys] for role in role_order
    ]


def refresh_matrix(
    store: TabularStore, config: SchedulerConfig, year: int, month: int
) -> bool:
    """
    Rebuild the availability section of the month's sheet from the roster.

    Returns:
        False if the roster or the availability sheet is missing, True otherwise
    """
    store = store.with_matrix(config.matrix_name(year, month))
    dates = service_dates(year, month, config.prayer_label)
    date_keys = [date.key for date in dates]

    try:
        roster = store.read_roster()
        if not roster:
            logging.error(f"No data found in the {config.roster_sheet_name} sheet.")
            return False

        matrix = fold_availability(roster, dates)
        rendered = render_matrix(matrix, dates, config.role_order)

        store.clear_matrix_region(config.role_order, date_keys)
        store.write_matrix_cells(
            (role, key, value)
            for role, values in zip(config.role_order, rendered)
            for key, value in zip(date_keys, values)
            if value
        )
    except MissingResourceError as exc:
        logging.error(f"Cannot refresh availability: {exc}")
        return False

    logging.info(f"Availability matrix updated in sheet: {store.matrix_name}")
    return True


def missing_responses(roster: list[RosterRow]) -> list[str]:
    """Members who have not said how many times they can serve."""
    return [row.name for row in roster if row.name and row.unavailable_all_month]


def print_availability(
    matrix: AvailabilityMatrix, dates: list[ServiceDate], role_order, no_response
):
    print("=" * 80)
    print("AVAILABILITY REPORT")
    print("=" * 80)

    for date in dates:
        print(f"\n{date.header}")
        for role in role_order:
            names = matrix.names(role, normalize_date_key(date.header))
            print(f"    {role:<9}({len(names)}): {', '.join(names)}")

    print("\nNo response / unavailable all month:")
    for name in sorted(no_response):
        print(f"  - {name}")


def run_availability_report(
    store: TabularStore, config: SchedulerConfig, today: datetime.date | None = None
) -> bool:
    """Print the planned month's availability without touching the sheet."""
    year, month = plan_month(today)
    try:
        roster = store.read_roster()
    except MissingResourceError as exc:
        logging.error(f"Cannot build availability report: {exc}")
        return False

    dates = service_dates(year, month, config.prayer_label)
    matrix = fold_availability(roster, dates)
    print_availability(matrix, dates, config.role_order, missing_responses(roster))
    return True
