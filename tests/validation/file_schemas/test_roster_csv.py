import pytest
from pydantic import ValidationError
from ministry_scheduler.validation.file_schemas.roster_csv import RosterCsvRowSchema

pytestmark = pytest.mark.unit


class TestRosterCsvRowSchema:
    def test_valid_row(self):
        schema = RosterCsvRowSchema.model_validate(
            {
                "name": "  Anna   Bell ",
                "roles": "wl, Singer, WL",
                "times_willing_to_serve": 2.0,
                "unavailable_dates": "06/08, 06/29",
                "comments": None,
            }
        )
        assert schema.name == "Anna Bell"
        assert schema.roles == ("WL", "SINGER")
        assert schema.times_willing_to_serve == "2"
        assert schema.comments == ""

    def test_all_fields_optional(self):
        schema = RosterCsvRowSchema.model_validate({})
        assert schema.name == ""
        assert schema.roles == ()
        assert schema.unavailable_dates == ()

    def test_unavailable_dates_are_normalized(self):
        schema = RosterCsvRowSchema.model_validate({"unavailable_dates": "6/1/2025, 06/15"})
        assert schema.unavailable_dates == ("06/01", "06/15")

    def test_name_too_long(self):
        with pytest.raises(ValidationError, match="at most 100 characters"):
            RosterCsvRowSchema.model_validate({"name": "x" * 101})
