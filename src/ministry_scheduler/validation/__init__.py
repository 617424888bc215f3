"""
Validation layer for Ministry Scheduler tabular input.

This module provides Pydantic-based validation for roster rows and form
responses. It validates in-memory records only; reading files and worksheets
happens in the stores.

Public API:
  - Schemas: Direct Pydantic validation (RosterCsvRowSchema, FormResponseRowSchema)
  - Converters: raw records -> domain objects (validate_roster, validate_form_response)
  - Parsers: cell-level helpers (normalize_date_key, parse_roles, parse_unavailable_dates)
"""

from ministry_scheduler.validation.converters import (
    remap_columns,
    validate_form_response,
    validate_roster,
)
from ministry_scheduler.validation.errors import FileValidationError
from ministry_scheduler.validation.file_schemas.responses_csv import FormResponseRowSchema
from ministry_scheduler.validation.file_schemas.roster_csv import RosterCsvRowSchema
from ministry_scheduler.validation.parsers import (
    normalize_date_key,
    parse_roles,
    parse_unavailable_dates,
    strip_date_label,
)

__all__ = [
    "FileValidationError",
    "FormResponseRowSchema",
    "RosterCsvRowSchema",
    "normalize_date_key",
    "parse_roles",
    "parse_unavailable_dates",
    "remap_columns",
    "strip_date_label",
    "validate_form_response",
    "validate_roster",
]
