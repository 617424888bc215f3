"""Month rollover: set up next month's availability sheet and retire last month's."""

import datetime
import logging
from ministry_scheduler.config import SchedulerConfig
from ministry_scheduler.errors import StoreError
from ministry_scheduler.layout import build_matrix_grid
from ministry_scheduler.service_dates import service_dates, shift_month
from ministry_scheduler.store import TabularStore


def form_date_choices(config: SchedulerConfig, year: int, month: int) -> list[str]:
    """Checkbox choices for the form's "not available" question."""
    return [date.header for date in service_dates(year, month, config.prayer_label)]


def setup_availability_sheet(store: TabularStore, config: SchedulerConfig, year: int, month: int):
    name = config.matrix_name(year, month)
    grid = build_matrix_grid(service_dates(year, month, config.prayer_label), config)
    store.create_matrix(name, grid)
    return name


def monthly_setup(
    store: TabularStore, config: SchedulerConfig, today: datetime.date | None = None
) -> bool:
    """
    Prepare the roster and sheets for the month after today.

    - lays out the "<Month> Availability" sheet for next month
    - clears the monthly roster fields (times, unavailable dates, comments)
    - deletes last month's availability sheet and any form-response tabs
    """
    today = today or datetime.date.today()
    plan_year, plan_month = shift_month(today.year, today.month, 1)
    old_year, old_month = shift_month(today.year, today.month, -1)

    try:
        new_name = setup_availability_sheet(store, config, plan_year, plan_month)
        logging.info(f"Created availability sheet: {new_name}")

        store.clear_roster_fields(config.monthly_fields)
        for field in config.monthly_fields:
            logging.info(f"{config.roster_columns[field]} column cleared.")

        old_name = config.matrix_name(old_year, old_month)
        if store.delete_matrix(old_name):
            logging.info(f"Deleted old tab: {old_name}")

        for tab in store.delete_response_tabs():
            logging.info(f"Deleted old Form Responses tab: {tab}")
    except StoreError:
        logging.exception("Monthly setup failed")
        return False

    return True
