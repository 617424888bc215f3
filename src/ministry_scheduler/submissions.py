import dataclasses
import datetime
import logging
from collections.abc import Iterable
from ministry_scheduler.availability import refresh_matrix
from ministry_scheduler.config import SchedulerConfig
from ministry_scheduler.errors import StoreError
from ministry_scheduler.models import FormResponse, RosterRow
from ministry_scheduler.service_dates import plan_month
from ministry_scheduler.store import TabularStore
from ministry_scheduler.validation.parsers import parse_unavailable_dates


def merge_response(existing: RosterRow | None, response: FormResponse) -> RosterRow:
    """
    Apply a form response to a member's roster row.

    The monthly fields are replaced wholesale; roles are kept from the roster
    since the form does not ask for them. A new member starts with no roles.
    """
    monthly = {
        "times_willing_to_serve": response.times_willing_to_serve,
        "unavailable_dates": parse_unavailable_dates(response.unavailable_dates),
        "comments": response.comments,
    }
    if existing is None:
        return RosterRow(name=response.name, **monthly)
    return dataclasses.replace(existing, **monthly)


def update_roster(store: TabularStore, response: FormResponse) -> RosterRow:
    roster = store.read_roster()
    existing = next((row for row in roster if row.name == response.name), None)
    row = merge_response(existing, response)
    store.upsert_roster_row(row)

    logging.debug(f"Name: {row.name}")
    logging.debug(f"Times Willing to Serve: {row.times_willing_to_serve}")
    logging.debug(f"Unavailable Dates: {', '.join(row.unavailable_dates)}")
    logging.debug(f"Comments: {row.comments}")
    return row


def handle_submission(
    store: TabularStore,
    config: SchedulerConfig,
    response: FormResponse,
    today: datetime.date | None = None,
) -> bool:
    """
    Record one form submission and refresh the planned month's matrix.

    Store failures are logged and swallowed; the submission is simply not
    recorded and False is returned.
    """
    try:
        update_roster(store, response)
    except StoreError:
        logging.exception(f"Error updating roster for {response.name}")
        return False

    year, month = plan_month(today)
    try:
        refreshed = refresh_matrix(store, config, year, month)
    except StoreError:
        logging.exception("Error refreshing availability matrix")
        return False
    if refreshed:
        logging.info("Updated availability")
    return refreshed


def apply_responses(
    store: TabularStore,
    config: SchedulerConfig,
    responses: Iterable[FormResponse] | None = None,
    today: datetime.date | None = None,
) -> bool:
    """
    Replay form responses into the roster in submission order, then refresh once.

    A member who submitted more than once ends up with their latest answers.

    Returns:
        False if the responses could not be read, any response failed to
        record, or the matrix refresh failed; True otherwise
    """
    if responses is None:
        responses = store.form_responses()

    recorded = failed = 0
    try:
        for response in responses:
            try:
                update_roster(store, response)
            except StoreError:
                logging.exception(f"Error updating roster for {response.name}")
                failed += 1
                continue
            recorded += 1
    except StoreError as exc:
        logging.error(f"Cannot read form responses: {exc}")
        return False

    logging.info(f"Recorded {recorded} form response(s)")
    year, month = plan_month(today)
    try:
        refreshed = refresh_matrix(store, config, year, month)
    except StoreError:
        logging.exception("Error refreshing availability matrix")
        return False
    return refreshed and not failed
