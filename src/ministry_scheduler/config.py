"""Scheduler configuration: sheet names, column headers and form question titles."""

import datetime
import os
from pathlib import Path
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    ValidationError,
    field_validator,
    model_validator,
)
from ministry_scheduler import constants
from ministry_scheduler.validation.errors import FileValidationError

CONFIG_ENV_VAR = "MINISTRY_CONFIG"


class SchedulerConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    spreadsheet_id: str | None = None
    roster_sheet_name: str = constants.ROSTER_SHEET_NAME
    matrix_name_template: str = constants.MATRIX_NAME_TEMPLATE
    form_responses_prefix: str = constants.FORM_RESPONSES_PREFIX

    role_order: tuple[str, ...] = constants.ROLE_ORDER
    prayer_label: str = constants.PRAYER_LABEL
    availability_start_row: PositiveInt = constants.AVAILABILITY_START_ROW

    roster_name_header: str = constants.ROSTER_NAME_HEADER
    roster_roles_header: str = constants.ROSTER_ROLES_HEADER
    roster_times_header: str = constants.ROSTER_TIMES_HEADER
    roster_dates_header: str = constants.ROSTER_DATES_HEADER
    roster_comments_header: str = constants.ROSTER_COMMENTS_HEADER

    form_name_question: str = constants.FORM_NAME_HEADER
    form_times_question: str = constants.FORM_TIMES_HEADER
    form_dates_question: str = constants.FORM_DATES_HEADER
    form_comments_question: str = constants.FORM_COMMENTS_HEADER
    form_timestamp_question: str = constants.FORM_TIMESTAMP_HEADER

    monthly_fields: tuple[str, ...] = Field(
        default=("times_willing_to_serve", "unavailable_dates", "comments")
    )

    @field_validator("role_order", mode="after")
    @classmethod
    def normalize_role_order(cls, v):
        """Roles are matched case-insensitively; store them upper-cased."""
        roles = tuple(role.strip().upper() for role in v)
        if not all(roles):
            raise ValueError("role names must not be empty")
        if len(set(roles)) != len(roles):
            raise ValueError("duplicate role in role_order")
        return roles

    @field_validator("matrix_name_template", mode="after")
    @classmethod
    def validate_matrix_name_template(cls, v):
        if "{month_name}" not in v:
            raise ValueError("matrix_name_template must contain {month_name}")
        return v

    @field_validator("monthly_fields", mode="after")
    @classmethod
    def validate_monthly_fields(cls, v):
        allowed = {"times_willing_to_serve", "unavailable_dates", "comments"}
        unknown = set(v) - allowed
        if unknown:
            raise ValueError(f"unknown monthly field(s): {sorted(unknown)}")
        return v

    @model_validator(mode="after")
    def validate_matrix_rows(self):
        # header row, one row per role, at least one blank row, then the label row
        minimum = len(self.role_order) + 4
        if self.availability_start_row < minimum:
            raise ValueError(f"availability_start_row must be at least {minimum}")
        return self

    @property
    def roster_columns(self) -> dict[str, str]:
        """Roster field name -> column header, in sheet column order."""
        return {
            "name": self.roster_name_header,
            "roles": self.roster_roles_header,
            "times_willing_to_serve": self.roster_times_header,
            "unavailable_dates": self.roster_dates_header,
            "comments": self.roster_comments_header,
        }

    @property
    def form_questions(self) -> dict[str, str]:
        """Form response field name -> question title."""
        return {
            "name": self.form_name_question,
            "times_willing_to_serve": self.form_times_question,
            "unavailable_dates": self.form_dates_question,
            "comments": self.form_comments_question,
            "timestamp": self.form_timestamp_question,
        }

    def matrix_name(self, year: int, month: int) -> str:
        month_name = datetime.date(year, month, 1).strftime("%B")
        return self.matrix_name_template.format(month_name=month_name, year=year)


def load_config(path: str | Path | None = None) -> SchedulerConfig:
    """
    Load configuration from a JSON file.

    Falls back to the MINISTRY_CONFIG environment variable, then to defaults
    when neither names a file.

    Raises:
        FileNotFoundError: If an explicit config path does not exist
        FileValidationError: If the file is not valid JSON or its settings fail validation
    """
    if path is None:
        path = os.getenv(CONFIG_ENV_VAR)
    if not path:
        return SchedulerConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"config file not found: {path}")
    try:
        return SchedulerConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise FileValidationError(str(path), exc) from exc
