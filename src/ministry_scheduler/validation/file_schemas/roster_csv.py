from pydantic import BaseModel, ConfigDict
from ministry_scheduler.validation.fields import CellText, DateKeyTuple, PersonNameStr, RoleTuple


class RosterCsvRowSchema(BaseModel):
    """
    Schema for one row of the roster ("Ministry Members") table.

    Rows are validated leniently: an empty name or role list is allowed here
    and such rows are dropped later by the availability fold.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: PersonNameStr = ""
    roles: RoleTuple = ()
    times_willing_to_serve: CellText = ""
    unavailable_dates: DateKeyTuple = ()
    comments: CellText = ""
