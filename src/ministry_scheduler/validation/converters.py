"""Validation wrappers and schema-to-domain conversion."""

import logging
from pydantic import ValidationError
from ministry_scheduler.models import FormResponse, RosterRow
from ministry_scheduler.validation.file_schemas.responses_csv import FormResponseRowSchema
from ministry_scheduler.validation.file_schemas.roster_csv import RosterCsvRowSchema


def remap_columns(record: dict, columns: dict[str, str]) -> dict:
    """
    Re-key a raw record from sheet headers to schema field names.

    Args:
        record: Raw row keyed by column header (or form question title)
        columns: Mapping of schema field name -> header

    Returns:
        Dict keyed by schema field name; missing headers are omitted
    """
    return {field: record[header] for field, header in columns.items() if header in record}


def roster_schema_to_row(schema: RosterCsvRowSchema) -> RosterRow:
    return RosterRow(
        name=schema.name,
        roles=schema.roles,
        times_willing_to_serve=schema.times_willing_to_serve,
        unavailable_dates=schema.unavailable_dates,
        comments=schema.comments,
    )


def response_schema_to_response(schema: FormResponseRowSchema) -> FormResponse:
    return FormResponse(
        name=schema.name,
        times_willing_to_serve=schema.times_willing_to_serve,
        unavailable_dates=schema.unavailable_dates,
        comments=schema.comments,
        timestamp=schema.timestamp,
    )


def validate_roster(records: list[dict], columns: dict[str, str]) -> list[RosterRow]:
    """
    Convert raw roster records to RosterRow objects, preserving order.

    A record that fails validation is logged and left out; the rest of the
    roster is still returned.
    """
    rows = []
    for index, record in enumerate(records):
        try:
            schema = RosterCsvRowSchema.model_validate(remap_columns(record, columns))
        except ValidationError as exc:
            logging.warning(f"Skipping roster row {index + 1}: {exc.errors()[0]['msg']}")
            continue
        rows.append(roster_schema_to_row(schema))
    return rows


def validate_form_response(record: dict, questions: dict[str, str]) -> FormResponse:
    """Convert one raw form record to a FormResponse (raises ValidationError)."""
    schema = FormResponseRowSchema.model_validate(remap_columns(record, questions))
    return response_schema_to_response(schema)
