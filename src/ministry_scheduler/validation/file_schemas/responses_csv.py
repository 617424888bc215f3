from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
from ministry_scheduler.validation.fields import CellText, DateTokenTuple, PersonNameStr
from ministry_scheduler.validation.parsers import parse_timestamp


class FormResponseRowSchema(BaseModel):
    """Schema for one submission row of the availability form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: PersonNameStr
    times_willing_to_serve: CellText = ""
    unavailable_dates: DateTokenTuple = ()
    comments: CellText = ""
    timestamp: datetime | None = None

    @field_validator("name", mode="after")
    @classmethod
    def validate_name(cls, v):
        """The name dropdown is required on the form."""
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("timestamp", mode="before")
    @classmethod
    def validate_timestamp(cls, v):
        return parse_timestamp(v)
