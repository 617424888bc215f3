from typing import Annotated
from pydantic import BeforeValidator, StringConstraints
from ministry_scheduler.validation.parsers import (
    parse_roles,
    parse_unavailable_dates,
    split_list_field,
)

MAX_PERSON_NAME_LENGTH = 100


def coerce_cell_text(v):
    """Spreadsheet cells may come back as numbers or None; store everything as text."""
    if v is None:
        return ""
    if isinstance(v, float) and v.is_integer():
        v = int(v)
    return " ".join(str(v).split())


def coerce_roles(v):
    return parse_roles(v)


def coerce_date_keys(v):
    return parse_unavailable_dates(v)


def coerce_date_tokens(v):
    return tuple(split_list_field(v))


CellText = Annotated[str, BeforeValidator(coerce_cell_text)]
PersonNameStr = Annotated[
    str,
    BeforeValidator(coerce_cell_text),
    StringConstraints(max_length=MAX_PERSON_NAME_LENGTH),
]
RoleTuple = Annotated[tuple[str, ...], BeforeValidator(coerce_roles)]
DateKeyTuple = Annotated[tuple[str, ...], BeforeValidator(coerce_date_keys)]
DateTokenTuple = Annotated[tuple[str, ...], BeforeValidator(coerce_date_tokens)]
